"""Command palette providers for popup presentation settings."""

from __future__ import annotations

from textual.command import DiscoveryHit, Hit, Hits, Provider
from textual.types import IgnoreReturnCallbackType

POPUP_SIZE_PRESETS: dict[str, tuple[int, int]] = {
    "Compact": (28, 6),
    "Regular": (36, 8),
    "Wide": (56, 12),
}

SUGGESTION_STYLE_PRESETS: dict[str, str] = {
    "Plain": "none",
    "Bold": "bold",
    "Italic": "italic",
    "Underline": "underline",
}


class PopupSizeProvider(Provider):
    """Expose popup size presets to the command palette."""

    async def search(self, query: str) -> Hits:
        if not self._supported:
            return
        matcher = self.matcher(query)
        for name, (width, height) in POPUP_SIZE_PRESETS.items():
            label = f"Popup size: {name}"
            match = matcher.match(label)
            if match > 0:
                yield Hit(
                    score=match,
                    match_display=matcher.highlight(label),
                    command=self._build_callback(width, height),
                    help=f"Show suggestions in a {width}x{height} popup.",
                )

    async def discover(self) -> Hits:
        if not self._supported:
            return
        for name, (width, height) in POPUP_SIZE_PRESETS.items():
            yield DiscoveryHit(
                display=f"Popup size: {name}",
                command=self._build_callback(width, height),
                help=f"Show suggestions in a {width}x{height} popup.",
            )

    @property
    def _supported(self) -> bool:
        return callable(getattr(self.app, "apply_popup_size", None))

    def _build_callback(self, width: int, height: int) -> IgnoreReturnCallbackType:
        async def _run() -> None:
            apply = getattr(self.app, "apply_popup_size", None)
            if apply is None:
                return
            apply(width, height)

        return _run


class SuggestionStyleProvider(Provider):
    """Expose suggestion text styles to the command palette."""

    async def search(self, query: str) -> Hits:
        if not self._supported:
            return
        matcher = self.matcher(query)
        for name, style in SUGGESTION_STYLE_PRESETS.items():
            label = f"Suggestion style: {name}"
            match = matcher.match(label)
            if match > 0:
                yield Hit(
                    score=match,
                    match_display=matcher.highlight(label),
                    command=self._build_callback(style),
                    help="Change how suggestions are rendered.",
                )

    async def discover(self) -> Hits:
        if not self._supported:
            return
        for name, style in SUGGESTION_STYLE_PRESETS.items():
            yield DiscoveryHit(
                display=f"Suggestion style: {name}",
                command=self._build_callback(style),
                help="Change how suggestions are rendered.",
            )

    @property
    def _supported(self) -> bool:
        return callable(getattr(self.app, "apply_suggestion_style", None))

    def _build_callback(self, style: str) -> IgnoreReturnCallbackType:
        async def _run() -> None:
            apply = getattr(self.app, "apply_suggestion_style", None)
            if apply is None:
                return
            apply(style)

        return _run


__all__ = [
    "POPUP_SIZE_PRESETS",
    "PopupSizeProvider",
    "SUGGESTION_STYLE_PRESETS",
    "SuggestionStyleProvider",
]
