"""Palette for the roadmap viewer and color utilities."""

from vazhi.core.roadmap import SectionLevel


class RoadmapColors:
    """Light palette shared by the section cards."""

    BG_TOP = "#f1f5f9"
    BG_BOTTOM = "#e2e8f0"

    CARD_BG = "#ffffff"
    CARD_BORDER = "#e2e8f0"
    STEP_BG_UNLOCKED = "#f8fafc"
    STEP_BG_LOCKED = "#f1f5f9"

    TEXT_PRIMARY = "#0f172a"
    TEXT_SECONDARY = "#334155"
    TEXT_MUTED = "#64748b"

    PROGRESS_TRACK = "#e2e8f0"

    # Topic statuses (emerald-500, blue-500, gray-300)
    COMPLETED = "#10b981"
    IN_PROGRESS = "#3b82f6"
    NOT_STARTED = "#d1d5db"


# Section tiers: (accent, badge background, badge text)
LEVEL_COLORS = {
    SectionLevel.BASIC: ("#10b981", "#d1fae5", "#047857"),
    SectionLevel.INTERMEDIATE: ("#3b82f6", "#dbeafe", "#1d4ed8"),
    SectionLevel.ADVANCED: ("#8b5cf6", "#ede9fe", "#6d28d9"),
}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b. Anything else comes back as *a*."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        start = [int(a[i:i + 2], 16) for i in (1, 3, 5)]
        end = [int(b[i:i + 2], 16) for i in (1, 3, 5)]
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    mixed = [int(s + (e - s) * t) for s, e in zip(start, end)]
    return "#" + "".join(f"{c:02X}" for c in mixed)
