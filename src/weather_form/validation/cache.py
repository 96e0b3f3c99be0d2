"""Process-lifetime store of location search results."""

from weather_form.integrations.weather_lookup.schemas import LocationMatch
from weather_form.utils.logger import logger
from weather_form.validation.keys import ValidationKey


class ResultCache:
    """Append-only map from ValidationKey to the provider's match list.

    Entries are never evicted, expired or overwritten: the first payload
    stored for a key is the one every later caller sees. No locking, since
    all access happens on the event loop thread with no await between a
    read and the write that depends on it.
    """

    def __init__(self) -> None:
        self._results: dict[ValidationKey, list[LocationMatch]] = {}

    def get(self, key: ValidationKey) -> list[LocationMatch] | None:
        matches = self._results.get(key)
        return list(matches) if matches is not None else None

    def put(self, key: ValidationKey, matches: list[LocationMatch]) -> None:
        if key in self._results:
            logger.debug("Result already cached, keeping first payload", key=str(key))
            return
        self._results[key] = list(matches)

    def __contains__(self, key: object) -> bool:
        return key in self._results

    def __len__(self) -> int:
        return len(self._results)
