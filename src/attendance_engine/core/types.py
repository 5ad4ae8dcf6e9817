from __future__ import annotations

from typing import Union

# Ids come from the collaborator as database integers or string keys.
EntityId = Union[int, str]
