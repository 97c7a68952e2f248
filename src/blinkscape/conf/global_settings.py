"""Default settings for blinkscape.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    BLINK_THRESHOLD = 0.6
    FADE_DURATION_MS = 500
"""

# Blink-hold gesture
BLINK_THRESHOLD = 0.5
"""Score above which an eye channel counts as closed (0 to 1)."""

BLINK_REQUIRED_DURATION_MS = 3000
"""How long both eyes must stay closed before a transition fires."""

BLINK_LEFT_CHANNEL = "eyeBlinkLeft"
"""Signal channel read for the left eye."""

BLINK_RIGHT_CHANNEL = "eyeBlinkRight"
"""Signal channel read for the right eye."""

# Transitions
FADE_DURATION_MS = 1000
"""Duration of each half (out and in) of the fade transition."""

OVERLAY_COLOR = (0, 0, 0)
"""RGB color of the fade overlay."""

TRANSITION_CUE_SOUND = ""
"""Sound played after each scene switch (empty string for none)."""

# Camera
DEFAULT_CAMERA_POSITION = (0.0, 2.0, 3.0)
"""Camera position before the first scene is activated."""

GAZE_SMOOTHING_FACTOR = 0.05
"""Fraction of the remaining gaze offset applied per frame. Lower is smoother."""

GAZE_ROTATION_MULTIPLIER = 3.0
"""Radians of camera rotation per unit of gaze score difference."""

# Assets
ASSETS_HANDLE = "experience_assets"
"""Arcade resource handle name used to resolve asset locators."""

LOAD_CHUNK_SIZE = 256 * 1024
"""Bytes read per step by the local asset loader."""

# Logging
LOG_LEVEL = "INFO"
"""Level passed to setup_logging() by create_experience()."""

# Scenes
SCENES = [
    {
        "id": "greenhouse",
        "name": "Mangrove Greenhouse",
        "path": "stylized_mangrove_greenhouse.glb",
        "position": {"x": 0, "y": 0, "z": 0},
        "scale": {"x": 1, "y": 1, "z": 1},
        "rotation": {"x": 0, "y": 0, "z": 0},
    },
    {
        "id": "scene2",
        "name": "Second Dimension",
        "path": "scene2.glb",
        "position": {"x": 0, "y": 0, "z": 0},
        "scale": {"x": 1, "y": 1, "z": 1},
        "rotation": {"x": 0, "y": 0, "z": 0},
    },
    {
        "id": "scene3",
        "name": "Third Dimension",
        "path": "scene3.glb",
        "position": {"x": 0, "y": 0, "z": 0},
        "scale": {"x": 1, "y": 1, "z": 1},
        "rotation": {"x": 0, "y": 0, "z": 0},
    },
]
"""Ordered scene list. Each entry may also carry ``camera`` and ``background``.

Example entry with a camera placement:
    {
        "id": "tower",
        "name": "Tower",
        "path": "tower.glb",
        "camera": {"position": {"x": 0, "y": 1.6, "z": 5}, "lookAt": {"x": 0, "y": 1, "z": 0}},
        "background": "#101820",
    }
"""
