# Autosave
AUTOSAVE_INTERVAL_SECONDS = 10.0  # Debounce window before a draft is persisted

# Animation projects
DEFAULT_CANVAS_WIDTH = 1280
DEFAULT_CANVAS_HEIGHT = 720
DEFAULT_FPS = 24
MIN_FPS = 1
MAX_FPS = 60
