"""Prompt generation for the guide generator."""

from ..models import GenerationRequest, OperatingSystem

_OS_FOCUS = {
    OperatingSystem.MACOS_LINUX: (
        "The user works on macOS or Linux (zsh or bash). Keep both branches of the "
        "environment step, but make the macos_linux branch the most detailed."
    ),
    OperatingSystem.WINDOWS: (
        "The user works on Windows (CMD or PowerShell). Keep both branches of the "
        "environment step, but make the windows branch the most detailed."
    ),
}


def _os_section(operating_system: OperatingSystem | None) -> str:
    if operating_system is None:
        return ""
    return f"\n## Operating system\n\n{_OS_FOCUS[operating_system]}\n"


def build_prompt(request: GenerationRequest) -> str:
    """Generate the prompt for a web-to-APK conversion guide.

    Args:
        request: Repository, target Android version and optional OS choice

    Returns:
        Prompt text asking for a JSON array of steps matching the response schema
    """
    version = request.platform_version
    return f"""# Web to Android APK Guide Request

Act as a very friendly technology guide for someone who knows nothing about
programming. Write "for dummies" instructions to turn the GitHub web project
{request.repository_url} into an Android app (APK) with Apache Cordova,
targeting **{version}**.

The answer MUST be a JSON array following the provided schema. Each object in
the array is one step.
{_os_section(request.operating_system)}
## Step fields

- title: a short, very simple title ("Step N: ...").
- explanation: the action to take, friendly but concise.
- command: one exact terminal command, or an empty string.
- details: extra notes. Use "--- Header ---" lines for sections, "1." for
  numbered items and "a." for lettered sub-items. Empty string if none.
- actions: buttons of type "command" (copy to clipboard) or "link" (open URL).

## Steps, in this exact order

1. Basic tools: link actions for Node.js LTS (https://nodejs.org/) and the Java
   JDK (https://www.oracle.com/java/technologies/downloads/); command
   `npm install -g cordova`.
2. Android Studio: link action to https://developer.android.com/studio. In the
   SDK Manager, install the {version} platform and "Android SDK Command-line
   Tools (latest)".
3. Environment setup: set isOsSpecific to true and leave the top-level command,
   details and actions empty. Fill osInstructions:
   - macos_linux: actions grouped as "shell_check" (`echo $SHELL`),
     "zshrc_setup" / "bash_setup" (create and open the shell profile with
     touch and nano), "common" (the ANDROID_HOME / JAVA_HOME / PATH block),
     "zshrc_apply" / "bash_apply" (source the profile) and "validation"
     (`echo $ANDROID_HOME`, `adb --version`). Details explain where to find
     the SDK path and how to use nano.
   - windows: no actions; details are a numbered list with lettered sub-items
     for setting ANDROID_HOME, JAVA_HOME and Path in the system settings.
4. Create the project: `cordova create my-web-app com.example.mywebapp MyWebApp`.
5. Enter the folder and add the platform:
   `cd my-web-app && cordova platform add android`; mention {version}.
6. Verify: `cordova requirements`, with a numbered troubleshooting checklist.
7. Move files: replace the contents of "www" with the web project files.
8. Build: `cordova build android`, run from the project folder.
9. Find the APK: platforms/android/app/build/outputs/apk/debug/app-debug.apk.
10. Next steps: customize config.xml (name, author, icon).
11. Optional app icon: the command is a complete square SVG icon.

All other steps set isOsSpecific to false.
"""
