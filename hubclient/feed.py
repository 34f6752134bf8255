"""Cocktail listing with "load more" paging into a single client-held list."""

import logging

logger = logging.getLogger(__name__)


class CocktailFeed:
    """
    Accumulate listing pages, skipping cocktails already shown.

    Newest-first listings follow the server cursor; other sorts fall back
    to page numbers.
    """

    def __init__(self, api, page_size=12, **filters):
        self.api = api
        self.page_size = page_size
        self.filters = {key: value for key, value in filters.items() if value}
        self.reset()

    def reset(self):
        self.items = []
        self._seen = set()
        self.page = 0
        self.cursor = None
        self.has_more = True

    def _params(self):
        params = dict(self.filters, limit=self.page_size)
        if self.cursor:
            params["cursor"] = self.cursor
        else:
            params["page"] = self.page + 1
        return params

    def load_more(self):
        """Fetch the next page and return the cocktails that were new."""
        if not self.has_more:
            return []
        body = self.api.list_cocktails(**self._params())
        rows = body.get("data") or []

        added = []
        for cocktail in rows:
            if cocktail["id"] in self._seen:
                continue
            self._seen.add(cocktail["id"])
            added.append(cocktail)
        self.items.extend(added)

        self.page += 1
        self.cursor = body.get("cursor")
        pages = body.get("pages")
        if self.cursor:
            self.has_more = True
        elif pages is not None:
            self.has_more = self.page < pages
        else:
            self.has_more = False
        logger.debug("Feed page %s added %d cocktails", self.page, len(added))
        return added

    def refresh(self):
        self.reset()
        return self.load_more()
