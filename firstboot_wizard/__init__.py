"""First-boot configuration wizard.

Modules are discovered from a site override directory and a shipped default
directory, ordered by priority, and driven through the wizard stages
(welcome, configure, apply, summary) by name-keyed hooks.
"""

__all__ = []
