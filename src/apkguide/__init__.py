"""apkguide: AI-generated guide for turning a web project into an Android APK."""

__version__ = "0.1.0"
