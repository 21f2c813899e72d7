from config.settings import get_settings, Settings

class BaseController:

    def __init__(self, app_settings: Settings = None):
        self.app_settings = app_settings or get_settings()
