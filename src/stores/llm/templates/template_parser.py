import importlib
import os
from string import Template
from typing import Optional, Union

LOCALES_PACKAGE = "stores.llm.templates.locales"


class TemplateParser:
    """Loads prompt templates from ``locales/<lang>/<group>.py`` modules.

    A template is either a ``string.Template`` or a dict of them
    (``{"system": ..., "user": ...}``); placeholders are filled with
    ``safe_substitute`` so unknown ``$names`` survive untouched.
    """

    def __init__(self, language: str = None, default_language: str = 'en'):
        self.locales_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "locales")
        self.default_language = default_language
        self.language = None
        self._modules = {}
        self.set_language(language)

    def set_language(self, language: str):
        if language and os.path.isdir(os.path.join(self.locales_path, language)):
            self.language = language
        else:
            self.language = self.default_language

    def load_group(self, group: str):
        for language in dict.fromkeys([self.language, self.default_language]):
            if not os.path.exists(os.path.join(self.locales_path, language, f"{group}.py")):
                continue
            name = f"{LOCALES_PACKAGE}.{language}.{group}"
            if name not in self._modules:
                self._modules[name] = importlib.import_module(name)
            return self._modules[name]
        return None

    @staticmethod
    def render(value, vars: dict):
        if isinstance(value, Template):
            return value.safe_substitute(vars)
        if isinstance(value, str):
            return Template(value).safe_substitute(vars)
        return value

    def get(self, group: str, key: str, vars: dict = None) -> Optional[Union[str, dict]]:
        if not group or not key:
            return None

        module = self.load_group(group)
        if module is None:
            return None

        value = getattr(module, key, None)
        if value is None:
            return None

        vars = vars or {}
        if isinstance(value, dict):
            return {sub_key: self.render(sub_value, vars) for sub_key, sub_value in value.items()}
        return self.render(value, vars)
