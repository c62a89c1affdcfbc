"""HTTP utilities package.

Exposes the injectable pooled httpx client holder.
"""

from .client import HttpClientPool

__all__ = ["HttpClientPool"]
