from __future__ import annotations

from pokernight.domain import GameSummary


def render_summary_text(summary: GameSummary) -> str:
    """Plain-text settlement summary for sharing outside the app."""
    lines = [
        f"{summary.game.name} - Settlement Summary",
        "",
        f"Total Pot: ${summary.total_pot:.2f}",
        "",
        "Settlements:",
    ]
    if summary.settlements:
        lines.extend(f"• {s.payer} pays {s.payee}: ${s.amount:.2f}" for s in summary.settlements)
    else:
        lines.append("All balanced! No settlements needed.")
    return "\n".join(lines) + "\n"
