"""Value objects passed along the analysis pipeline."""
import base64
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SourceImage:
    data: bytes
    media_type: str


@dataclass(frozen=True)
class EncodedImage:
    data: str
    media_type: str

    def raw_bytes(self) -> bytes:
        return base64.standard_b64decode(self.data)

    def to_wire(self) -> dict[str, Any]:
        """Image block in the shape the HTTP backend and the Claude API both accept."""
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": self.media_type,
                "data": self.data,
            },
        }


@dataclass(frozen=True)
class AnalysisRequest:
    images: tuple[EncodedImage, ...]
    instruction: str
    model: str


@dataclass(frozen=True)
class Verdict:
    title: str = ""
    color: str = ""


@dataclass(frozen=True)
class Highlight:
    type: str = ""
    label: str = ""
    value: str = ""
    desc: str = ""


@dataclass(frozen=True)
class Translation:
    origin: str = ""
    simplified: str = ""
    explain: str = ""


@dataclass(frozen=True)
class Advice:
    target: str = ""
    warning: str = ""
    action: str = ""


@dataclass(frozen=True)
class AnalysisResult:
    product_name: str = ""
    verdict: Verdict = field(default_factory=Verdict)
    highlights: tuple[Highlight, ...] = ()
    translations: tuple[Translation, ...] = ()
    advice: Advice = field(default_factory=Advice)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """Build from the model's camelCase JSON. Missing or mistyped parts become empty."""
        return cls(
            product_name=_text(data.get("productName")),
            verdict=Verdict(**_fields(data.get("verdict"), ("title", "color"))),
            highlights=tuple(
                Highlight(**_fields(item, ("type", "label", "value", "desc")))
                for item in _items(data.get("highlights"))
            ),
            translations=tuple(
                Translation(**_fields(item, ("origin", "simplified", "explain")))
                for item in _items(data.get("translations"))
            ),
            advice=Advice(**_fields(data.get("advice"), ("target", "warning", "action"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "productName": self.product_name,
            "verdict": {"title": self.verdict.title, "color": self.verdict.color},
            "highlights": [
                {"type": h.type, "label": h.label, "value": h.value, "desc": h.desc}
                for h in self.highlights
            ],
            "translations": [
                {"origin": t.origin, "simplified": t.simplified, "explain": t.explain}
                for t in self.translations
            ],
            "advice": {
                "target": self.advice.target,
                "warning": self.advice.warning,
                "action": self.advice.action,
            },
        }


# ── tolerant field readers ────────────────────────────────────────────────────


def _text(value: Any) -> str:
    match value:
        case None:
            return ""
        case str():
            return value
        case _:
            return str(value)


def _fields(obj: Any, names: tuple[str, ...]) -> dict[str, str]:
    match obj:
        case dict():
            return {name: _text(obj.get(name)) for name in names}
        case _:
            return {}


def _items(value: Any) -> list[Any]:
    match value:
        case list():
            return [item for item in value if isinstance(item, dict)]
        case _:
            return []
