"""Per-enrichment mapping from entity identifier to display caption."""


class CaptionCache:
    """Caption lookup scoped to a single enrichment call.

    The first caption recorded for an identifier wins; later writes for the same
    identifier are ignored, so conflicting embedded captions cannot flip a name
    halfway through an enrichment.
    """

    def __init__(self, captions: dict[str, str] | None = None):
        self._captions: dict[str, str] = {}
        for entity_id, caption in (captions or {}).items():
            self.add(entity_id, caption)

    def add(self, entity_id: str | None, caption: str | None) -> bool:
        """Record a caption unless the identifier is already mapped.

        Returns:
            True if the caption was stored
        """
        if not entity_id or not caption or entity_id in self._captions:
            return False
        self._captions[entity_id] = caption
        return True

    def get(self, entity_id: str) -> str | None:
        return self._captions.get(entity_id)

    def display_name(self, entity_id: str) -> str:
        """Cached caption, or the raw identifier when unresolved."""
        return self._captions.get(entity_id) or entity_id

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._captions

    def __len__(self) -> int:
        return len(self._captions)

    def as_dict(self) -> dict[str, str]:
        return dict(self._captions)
