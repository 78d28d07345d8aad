"""Go-to-implementation query for a position in source text."""

import logging
from typing import Optional

from ..config import ResolverConfig
from ..graph import SearchScope, SymbolIndex
from ..models import GotoResult, NotFound
from ..output.messages import not_found_message
from .base import Query
from .callsite import extract_call_site
from .implementation import ImplementationQuery

logger = logging.getLogger(__name__)

ACTION_TEXT = "Go to gRPC Implementation"


class GotoImplementationQuery(Query[GotoResult]):
    """Find the call under the cursor and resolve its implementation."""

    def __init__(
        self,
        index: SymbolIndex,
        config: Optional[ResolverConfig] = None,
        scope: Optional[SearchScope] = None,
    ):
        super().__init__(index)
        self.config = config
        self.scope = scope

    def execute(self, source: str, offset: int) -> GotoResult:
        """Execute navigation from a source offset.

        Returns:
            GotoResult with call_site None when the offset is not on a
            qualified call. Failed resolutions carry a user-facing message.
        """
        call_site = extract_call_site(source, offset)
        if call_site is None:
            logger.info("Offset %d is not inside a qualified call expression", offset)
            return GotoResult(call_site=None)

        logger.debug(
            "Call site receiver=%s method=%s", call_site.receiver_text, call_site.method_name
        )
        query = ImplementationQuery(self.index, config=self.config, scope=self.scope)
        outcome = query.execute(call_site.receiver_name, call_site.method_name)

        message = None
        if isinstance(outcome, NotFound):
            message = not_found_message(outcome)
        return GotoResult(call_site=call_site, outcome=outcome, message=message)
