"""Plain-text result card for chat transports."""
from nutrition_decoder.constants import (
    CARD_ACTION,
    CARD_ADVICE,
    CARD_HIGHLIGHTS,
    CARD_TARGET,
    CARD_TRANSLATIONS,
    CARD_UNKNOWN_PRODUCT,
    CARD_WARNING,
    HIGHLIGHT_ICON_DEFAULT,
    HIGHLIGHT_ICONS,
    VERDICT_ICON_DEFAULT,
    VERDICT_ICONS,
)
from nutrition_decoder.models import AnalysisResult, Highlight, Translation


def _highlight_line(h: Highlight) -> str:
    icon = HIGHLIGHT_ICONS.get(h.type.lower(), HIGHLIGHT_ICON_DEFAULT)
    head = " ".join(filter(None, (icon, h.label, h.value)))
    return f"{head} — {h.desc}" if h.desc else head


def _translation_line(t: Translation) -> str:
    head = f"• {t.origin} → {t.simplified}" if t.simplified else f"• {t.origin}"
    return f"{head}: {t.explain}" if t.explain else head


def _section(title: str, lines: list[str]) -> list[str]:
    return ["", title, *lines] if lines else []


def render_card(result: AnalysisResult) -> str:
    icon = VERDICT_ICONS.get(result.verdict.color.lower(), VERDICT_ICON_DEFAULT)
    header = [result.product_name or CARD_UNKNOWN_PRODUCT]
    header += [f"{icon} {result.verdict.title}"] if result.verdict.title else []

    advice = [
        f"{label}: {text}"
        for label, text in (
            (CARD_TARGET, result.advice.target),
            (CARD_WARNING, result.advice.warning),
            (CARD_ACTION, result.advice.action),
        )
        if text
    ]

    lines = (
        header
        + _section(CARD_HIGHLIGHTS, list(map(_highlight_line, result.highlights)))
        + _section(CARD_TRANSLATIONS, list(map(_translation_line, result.translations)))
        + _section(CARD_ADVICE, advice)
    )
    return "\n".join(lines)
