"""Root password."""

from firstboot_wizard.lib import passwd
from firstboot_wizard.lib.credentials import ROOT_PASSWORD


def _prompt(ctx):
    d = ctx.dialog
    while True:
        first = d.ask(lambda: d.passwordbox("Enter the root password", title="Root password")).value
        if not first:
            d.msgbox("The password must not be empty.", title="Root password")
            continue
        second = d.ask(lambda: d.passwordbox("Repeat the root password", title="Root password")).value
        if first != second:
            d.msgbox("The passwords do not match.", title="Root password")
            continue
        return first


def register(module):
    module.priority = 90

    @module.hook("configure")
    def configure(ctx):
        seeded = ctx.credential(ROOT_PASSWORD)
        if seeded:
            ctx.secrets["root_password"] = seeded
            return 0
        if ctx.dry_run:
            ctx.secrets["root_password"] = ""
            return 0
        ctx.secrets["root_password"] = _prompt(ctx)

    @module.hook("apply")
    def apply(ctx):
        password = ctx.secrets.get("root_password")
        if password is None:
            # Resumed run: the password is never persisted.
            return 0
        if not passwd.set_root_password(password, dry_run=ctx.dry_run):
            ctx.dialog.warn("Failed to set the root password.")
            return 1
        ctx.answers["root_password_set"] = True
