from __future__ import annotations

from contextvars import ContextVar

# Depth of the nested `create()` calls triggered by relation directives.
# Every relation resolution works on a copy, so sibling calls see the same depth.
factory_depth: ContextVar[int] = ContextVar("factory_depth", default=0)
