"""
Advanced SubStation Alpha (ASS) script model.

Scripts are assembled from `AssStyle` and `AssEvent` records and turned
into text with `AssScript.render()`.
"""
from dataclasses import dataclass, field
from typing import Optional

from .layout import format_ass_time

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, "
    "BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, "
    "BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"

# BorderStyle values
OUTLINE = 1
OPAQUE_BOX = 3
BACKGROUND_BOX = 4


def _color(value: str) -> str:
    # style lines take &HAABBGGRR without the trailing '&' used by inline tags
    return value.rstrip("&")


@dataclass
class AssStyle:
    name: str
    font: str = "Arial"
    size: int = 24
    primary: str = "&H00FFFFFF"
    secondary: str = "&H000000FF"
    outline_color: str = "&H00000000"
    back: str = "&H80000000"
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikeout: bool = False
    scale_x: int = 100
    scale_y: int = 100
    spacing: float = 0
    angle: float = 0
    border_style: int = OUTLINE
    outline: float = 2
    shadow: float = 1
    alignment: int = 2
    margin_l: int = 10
    margin_r: int = 10
    margin_v: int = 30
    encoding: int = 1

    def line(self) -> str:
        fields = [
            self.name,
            self.font,
            int(round(self.size)),
            _color(self.primary),
            _color(self.secondary),
            _color(self.outline_color),
            _color(self.back),
            -1 if self.bold else 0,
            -1 if self.italic else 0,
            -1 if self.underline else 0,
            -1 if self.strikeout else 0,
            self.scale_x,
            self.scale_y,
            _num(self.spacing),
            _num(self.angle),
            self.border_style,
            _num(self.outline),
            _num(self.shadow),
            self.alignment,
            self.margin_l,
            self.margin_r,
            self.margin_v,
            self.encoding,
        ]
        return "Style: " + ",".join(str(f) for f in fields)


def _num(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


@dataclass
class AssEvent:
    start: float
    end: float
    text: str
    style: str = "Default"
    layer: int = 0

    def line(self) -> str:
        return (
            f"Dialogue: {self.layer},{format_ass_time(self.start)},{format_ass_time(self.end)},"
            f"{self.style},,0,0,0,,{self.text}"
        )


@dataclass
class AssScript:
    title: str = "Subtitles"
    play_res_x: int = 1920
    play_res_y: int = 1080
    styles: list[AssStyle] = field(default_factory=list)
    events: list[AssEvent] = field(default_factory=list)

    def add_style(self, style: AssStyle) -> AssStyle:
        self.styles.append(style)
        return style

    def add_event(self, start: float, end: float, text: str, style: str = "Default", layer: int = 0) -> Optional[AssEvent]:
        """Append a dialogue event; zero-length or inverted events are dropped."""
        if end <= start:
            return None
        event = AssEvent(start=start, end=end, text=text, style=style, layer=layer)
        self.events.append(event)
        return event

    def style_names(self) -> list[str]:
        return [s.name for s in self.styles]

    def render(self) -> str:
        lines = [
            "[Script Info]",
            f"Title: {self.title}",
            "ScriptType: v4.00+",
            f"PlayResX: {self.play_res_x}",
            f"PlayResY: {self.play_res_y}",
            "WrapStyle: 0",
            "ScaledBorderAndShadow: yes",
            "",
            "[V4+ Styles]",
            STYLE_FORMAT,
        ]
        lines.extend(s.line() for s in self.styles)
        lines.extend(["", "[Events]", EVENT_FORMAT])
        lines.extend(e.line() for e in self.events)
        return "\n".join(lines) + "\n"


def escape_ass_text(text: str) -> str:
    """Keep user text from opening override blocks."""
    return text.replace("{", "(").replace("}", ")").replace("\n", "\\N")
