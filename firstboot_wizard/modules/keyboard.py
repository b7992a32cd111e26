"""Console keyboard layout."""

from firstboot_wizard.lib import localectl
from firstboot_wizard.lib.credentials import KEYMAP

DEFAULT_KEYMAP = "us"


def _choose(ctx):
    keymaps = [] if ctx.dry_run else localectl.list_keymaps()
    current = ctx.answers.get("keymap") or DEFAULT_KEYMAP
    if keymaps:
        items = [(k, "") for k in keymaps]
        default = current if current in keymaps else keymaps[0]
        return ctx.dialog.ask(
            lambda: ctx.dialog.menu("Select the keyboard layout", items, title="Keyboard", default=default)
        ).value
    return ctx.dialog.ask(
        lambda: ctx.dialog.inputbox("Enter the keyboard layout", title="Keyboard", default=current)
    ).value


def register(module):
    module.priority = 30

    @module.hook("configure")
    def configure(ctx):
        value = (ctx.credential(KEYMAP) or _choose(ctx)).strip()
        if not value:
            return 1
        ctx.answers["keymap"] = value

    @module.hook("apply")
    def apply(ctx):
        value = ctx.answers.get("keymap")
        if not value:
            return 0
        if not localectl.set_keymap(value, dry_run=ctx.dry_run):
            ctx.dialog.warn(f"Failed to set the keyboard layout to {value}.")
            return 1
