"""Greeting screen and closing summary."""

import logging

from firstboot_wizard.lib.os_release import load_os_release

logger = logging.getLogger(__name__)


def register(module):
    module.priority = 10

    @module.hook("welcome")
    def welcome(ctx):
        release = load_os_release(ctx.config.get("os_release"))
        version = release.get("VERSION") or release.get("VERSION_ID") or ""
        text = f"Welcome to {ctx.dialog.product} {version}".rstrip() + ".\n\n"
        text += "This wizard sets up the language, the keyboard layout and the root password."
        ctx.dialog.ask(lambda: ctx.dialog.msgbox(text, title="Welcome"))

    @module.hook("summary")
    def summary(ctx):
        lines = []
        for key, label in (("locale", "Locale"), ("keymap", "Keyboard")):
            if key in ctx.answers:
                lines.append(f"{label}: {ctx.answers[key]}")
        if ctx.answers.get("root_password_set"):
            lines.append("Root password: set")
        else:
            logger.warning("Root password was not set during this setup")
            lines.append("Root password: NOT set")
        body = "\n".join(lines)
        ctx.dialog.msgbox(f"Setup is complete.\n\n{body}", title="Summary")
