from string import Template

# --- Structured analysis requested from LLM vision backends ---
analysis_prompt = {
    "system": "\n".join([
        "You are an expert photographer and art director who describes the visual style of images.",
        "You MUST answer with a single JSON object and nothing else. No markdown, no comments.",
    ]),
    "user": "\n".join([
        "Analyze the visual style of this image and return a JSON object with these string keys:",
        "- type: one of Photo, Illustration, Digital Art, Anime, 3D Render",
        "- style: the photographic or artistic style, e.g. Professional portrait photography",
        "- lighting: the lighting setup, e.g. Golden hour warm lighting",
        "- composition: framing and camera angle, e.g. Close-up shot",
        "- colors: the color palette, e.g. Warm tones with teal accents",
        "- mood: the atmosphere, e.g. Peaceful and serene",
        "- realism: the level of realism, e.g. High realism with natural textures",
        "- personDescription: pose, clothing and expression of the main person, or No people visible",
        "- objectsDescription: the notable objects in the scene",
        "- environmentDescription: the setting and background",
        "Also include tags and objects as arrays of short lowercase strings.",
        "Keep each value under $max_words words.",
    ]),
}

# --- Single-call variant: the backend writes the final prompt itself ---
direct_prompt = {
    "system": "\n".join([
        "You write prompts for an image generation tool that will recreate the style of a reference image with the user's own face.",
        "Answer with the prompt text only. No introduction, no markdown, no quotes.",
    ]),
    "user": "\n".join([
        "Describe this image as a generation prompt: image type, style, lighting, composition, color palette, mood, realism,",
        "the person's pose and clothing, the objects and the environment.",
        "Refer to the person as [USER FACE].",
        "Write at most $max_words words in one or two paragraphs.",
    ]),
}
