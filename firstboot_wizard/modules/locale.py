"""System locale (LANG)."""

from firstboot_wizard.lib import localectl
from firstboot_wizard.lib.credentials import LOCALE

DEFAULT_LOCALE = "C.UTF-8"


def _choose(ctx):
    locales = [] if ctx.dry_run else localectl.list_locales()
    current = ctx.answers.get("locale") or DEFAULT_LOCALE
    if locales:
        items = [(loc, "") for loc in locales]
        default = current if current in locales else locales[0]
        return ctx.dialog.ask(
            lambda: ctx.dialog.menu("Select the system locale", items, title="Locale", default=default)
        ).value
    return ctx.dialog.ask(
        lambda: ctx.dialog.inputbox("Enter the system locale", title="Locale", default=current)
    ).value


def register(module):
    module.priority = 20

    @module.hook("configure")
    def configure(ctx):
        value = ctx.credential(LOCALE) or _choose(ctx)
        value = value.strip()
        if not value:
            return 1
        ctx.answers["locale"] = value

    @module.hook("apply")
    def apply(ctx):
        value = ctx.answers.get("locale")
        if not value:
            return 0
        if not localectl.set_locale(value, dry_run=ctx.dry_run):
            ctx.dialog.warn(f"Failed to set the locale to {value}.")
            return 1
