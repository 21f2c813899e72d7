from string import Template

# --- Style prompt rendered from an ImageAnalysis ---
style_prompt = Template("\n".join([
    "Create a $type in $style style, featuring [USER FACE] as the main subject.",
    "",
    "The image should use $lighting, with a $composition approach.",
    "",
    "The color palette should consist of $colors, creating a $mood atmosphere. The overall $realism quality with natural textures and professional lighting.",
    "",
    "Key visual elements to include:",
    "- $lighting",
    "- $composition",
    "- Natural skin tones and realistic features",
    "- Appropriate background context",
    "- Professional color grading matching the $style aesthetic",
    "",
    "Important: Use the user's uploaded face photo as a base, matching the lighting, angle, and mood described above to create a cohesive, realistic portrait. Maintain the $mood atmosphere while ensuring that the face looks natural and well-integrated into the scene.",
]))

# --- Style prompt with subject, object and environment details ---
detailed_style_prompt = Template("\n".join([
    "Create a $type in $style style, featuring [USER FACE] as the main subject.",
    "",
    "Subject: $person_description. Replace the person with the user from the uploaded photo, keeping the same pose, framing and clothing style.",
    "Scene: $environment_description. $objects_description.",
    "",
    "Lighting: $lighting. Composition: $composition.",
    "Colors: $colors, creating a $mood atmosphere.",
    "Rendering: $realism, natural skin tones, realistic textures and professional color grading matching the $style aesthetic.",
]))

# --- Identity preservation sentence, always the last line of the final prompt ---
face_lock = Template(
    "Keep the face from the uploaded photo exactly as it is: same facial features, proportions, skin tone and identity, with no changes, beautification or replacement."
)
