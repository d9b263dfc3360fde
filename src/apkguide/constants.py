"""Constants for apkguide."""

# Substring a repository URL must contain to be accepted
REPOSITORY_HOST_MARKER = "github.com"

ANDROID_VERSIONS = (
    "Android 14 (Upside Down Cake)",
    "Android 13 (Tiramisu)",
    "Android 12 (Snow Cone)",
    "Android 11 (Red Velvet Cake)",
    "Android 10 (Q)",
)
DEFAULT_PLATFORM_VERSION = ANDROID_VERSIONS[0]

# Cosmetic progress phases shown while a guide is generated
STATUS_MESSAGES = (
    "Connecting to the GitHub repository...",
    "Analyzing the project structure...",
    "Generating the conversion script with AI...",
    "Compiling the build instructions...",
    "Finishing your interactive guide...",
)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
FALLBACK_API_KEY_ENV = "API_KEY"

# Seconds
STATUS_INTERVAL = 1.0
COPIED_FEEDBACK_SECONDS = 2.0
