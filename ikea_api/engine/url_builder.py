# Path: ikea_api/engine/url_builder.py
"""
Catalog URL Builder

Builds the remote catalog endpoints. Region, locale and base URLs are read
from configuration on every call, so runtime changes apply to the next
request.
"""

from typing import Optional

from ikea_api.core.config_loader import ConfigLoader
from ikea_api.engine.identifier import ProductIdentifier, is_valid_identifier
from ikea_api.constants import (
    ENDPOINT_SEARCH,
    ENDPOINT_METADATA,
    ENDPOINT_EXISTS,
    ENDPOINT_MODEL,
    SEARCH_TYPES,
    SEARCH_EXTRA_PARAMS,
    IDENTIFIER_SEARCH_PAGE_SIZE,
)


class CatalogURLBuilder:
    """
    Endpoint templates for search, metadata, existence and model metadata.

    Example:
        builder = CatalogURLBuilder()
        url = builder.metadata_url(ProductIdentifier.parse('00346735'))
        # https://www.ikea.com/ie/en/products/735/00346735.json
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config if config else ConfigLoader()

    def _location(self) -> dict:
        return {
            'region': self.config.get('region'),
            'locale': self.config.get('locale'),
        }

    def _join(self, base_key: str, path: str) -> str:
        return self.config.get(base_key).rstrip('/') + path

    def search_url(self) -> str:
        return self._join('search_base_url', ENDPOINT_SEARCH.format(**self._location()))

    def search_params(self, query: str) -> dict:
        """
        Query parameters for a search.

        A query that is itself an identifier asks for a single hit.
        """
        if is_valid_identifier(query):
            size = IDENTIFIER_SEARCH_PAGE_SIZE
        else:
            size = self.config.get('search_page_size')

        params = {
            'q': query,
            'types': SEARCH_TYPES,
            'size': str(size),
        }
        params.update(SEARCH_EXTRA_PARAMS)
        return params

    def metadata_url(self, identifier: ProductIdentifier) -> str:
        path = ENDPOINT_METADATA.format(
            partition=identifier.partition,
            item_no=identifier.compact,
            **self._location()
        )
        return self._join('catalog_base_url', path)

    def exists_url(self, identifier: ProductIdentifier) -> str:
        path = ENDPOINT_EXISTS.format(item_no=identifier.compact, **self._location())
        return self._join('api_base_url', path)

    def model_url(self, identifier: ProductIdentifier) -> str:
        path = ENDPOINT_MODEL.format(item_no=identifier.compact, **self._location())
        return self._join('api_base_url', path)


__all__ = ['CatalogURLBuilder']
