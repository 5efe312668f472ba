"""Command hierarchy groups for organized CLI experience.

Provides logical grouping of commands under:
  ct config   — Scan configuration
  ct tags     — Workspace-wide custom tag usages
"""

from __future__ import annotations

import typer

# ── Configuration group ──────────────────────────────────────
config_grp = typer.Typer(
    help="⚙️  Configuration — default folder, tag prefix, extensions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ── Tag usage group ──────────────────────────────────────────
tags_grp = typer.Typer(
    help="🏷️  Tags — find custom <c-*> tag usages across the workspace.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
