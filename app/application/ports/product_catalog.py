"""Product catalog port."""

from abc import ABC, abstractmethod

from app.domain.value_objects.product import Product


class ProductCatalog(ABC):
    """Port interface for product catalog search."""

    @abstractmethod
    async def search_products(self, term: str, limit: int = 5) -> list[Product]:
        """
        Search products by name.

        Args:
            term: Search term
            limit: Maximum number of results

        Returns:
            Matching products (empty if none found)

        Raises:
            BackendApiError: If the catalog is unreachable or fails
        """
        pass
