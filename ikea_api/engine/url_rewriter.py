# Path: ikea_api/engine/url_rewriter.py
"""
Model URL Rewriter

Points Draco-compressed model URLs at their uncompressed variants.
Consumers that cannot decode Draco get a plain GLB instead.
"""

from typing import Iterable, Optional

from ikea_api.core.logger import get_logger
from ikea_api.constants import MODEL_URL_REWRITE_RULES, LOG_PROCESS

logger = get_logger(__name__, 'engine')


class ModelURLRewriter:
    """
    Ordered (pattern, replacement) substitutions on a model URL.

    Example:
        rewriter = ModelURLRewriter()
        rewriter.rewrite('https://cdn/glb_draco/abc_draco.glb')
        # 'https://cdn/glb/abc.glb'
    """

    def __init__(self, rules: Optional[Iterable[tuple[str, str]]] = None):
        self.rules = tuple(rules) if rules is not None else MODEL_URL_REWRITE_RULES

    def is_compressed(self, url: str) -> bool:
        return any(pattern in url for pattern, _ in self.rules)

    def rewrite(self, url: str) -> str:
        """Apply every rule whose pattern occurs in the URL."""
        if not url:
            return url

        rewritten = url
        for pattern, replacement in self.rules:
            rewritten = rewritten.replace(pattern, replacement)

        if rewritten != url:
            logger.info(f"{LOG_PROCESS} Rewrote compressed model URL: {url} -> {rewritten}")

        return rewritten


__all__ = ['ModelURLRewriter']
