"""Cart engine: stock-validated cart mutations and totals."""

from dataclasses import dataclass
from typing import Optional

from app.application.dtos.order import OrderLineItem
from app.application.ports.cart_repository import CartRepository
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.domain.entities.cart import Cart, CartLine, CartTotals
from app.domain.value_objects.product import Product

STOCK_INSUFFICIENT = "STOCK_INSUFICIENTE"
PRODUCT_NOT_IN_CART = "PRODUCTO_NO_ENCONTRADO"
INVALID_QUANTITY = "CANTIDAD_INVALIDA"


def _units(quantity: int) -> str:
    return "unidad" if quantity == 1 else "unidades"


@dataclass(frozen=True)
class CartOperationResult:
    """Outcome of a cart mutation."""

    success: bool
    message: str
    error_code: Optional[str] = None
    line: Optional[CartLine] = None
    totals: Optional[CartTotals] = None


class CartService:
    """Per-user cart operations with quantity-tier pricing."""

    def __init__(self, cart_repository: CartRepository, sessions: SessionLifecycle) -> None:
        """
        Initialize cart service.

        Args:
            cart_repository: Cart store
            sessions: Session lifecycle used for expiry-aware reads
        """
        self._carts = cart_repository
        self._sessions = sessions

    async def _load(self, user_id: str) -> Cart:
        cart = await self._carts.get(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
        return cart

    @staticmethod
    def _invalid_quantity() -> CartOperationResult:
        return CartOperationResult(
            success=False,
            message="❌ La cantidad debe ser un número entero positivo",
            error_code=INVALID_QUANTITY,
        )

    async def get_cart(self, user_id: str) -> Cart:
        """
        Read a user's cart.

        An expired session empties the cart before it is returned.

        Args:
            user_id: User identifier

        Returns:
            The cart, possibly empty
        """
        if await self._sessions.is_expired(user_id):
            await self._carts.delete(user_id)
            return Cart(user_id=user_id)
        return await self._load(user_id)

    async def add_to_cart(self, user_id: str, product: Product, quantity: int) -> CartOperationResult:
        """
        Add units of a product, merging with an existing line.

        Args:
            user_id: User identifier
            product: Catalog product with its available stock
            quantity: Units to add

        Returns:
            Result with the updated line and totals, or the stock failure
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            return self._invalid_quantity()

        if quantity > product.stock:
            return CartOperationResult(
                success=False,
                message=(
                    f"⚠️ Stock insuficiente. Solo hay {product.stock} unidades disponibles."
                ),
                error_code=STOCK_INSUFFICIENT,
            )

        cart = await self.get_cart(user_id)
        line = cart.find_line(product.product_id)
        if line is not None:
            merged = line.quantity + quantity
            if merged > product.stock:
                return CartOperationResult(
                    success=False,
                    message=(
                        f"⚠️ Stock insuficiente. Ya tienes {line.quantity} en el carrito. "
                        f"Solo hay {product.stock} disponibles."
                    ),
                    error_code=STOCK_INSUFFICIENT,
                )
            line.available_stock = product.stock
            line.set_quantity(merged)
        else:
            line = CartLine(
                product_id=product.product_id,
                name=product.name,
                quantity=quantity,
                unit_price=product.unit_price,
                bulk_price=product.bulk_price,
                available_stock=product.stock,
            )
            cart.lines.append(line)

        await self._carts.save(cart)
        return CartOperationResult(
            success=True,
            message=f"✅ {product.name} agregado al carrito ({quantity} {_units(quantity)})",
            line=line,
            totals=cart.totals(),
        )

    async def update_quantity(
        self, user_id: str, product_id: int, new_quantity: int
    ) -> CartOperationResult:
        """
        Set the quantity of an existing line.

        Args:
            user_id: User identifier
            product_id: Product of the line
            new_quantity: New units, validated against the line's cached stock

        Returns:
            Result with the repriced line and totals
        """
        if not isinstance(new_quantity, int) or isinstance(new_quantity, bool) or new_quantity <= 0:
            return self._invalid_quantity()

        cart = await self.get_cart(user_id)
        line = cart.find_line(product_id)
        if line is None:
            return CartOperationResult(
                success=False,
                message="❌ El producto no está en el carrito",
                error_code=PRODUCT_NOT_IN_CART,
            )
        if new_quantity > line.available_stock:
            return CartOperationResult(
                success=False,
                message=(
                    f"⚠️ Stock insuficiente. Solo hay {line.available_stock} unidades disponibles."
                ),
                error_code=STOCK_INSUFFICIENT,
            )

        line.set_quantity(new_quantity)
        await self._carts.save(cart)
        return CartOperationResult(
            success=True,
            message=(
                f"✅ Cantidad actualizada: {line.name} ({new_quantity} {_units(new_quantity)})"
            ),
            line=line,
            totals=cart.totals(),
        )

    async def remove_from_cart(self, user_id: str, product_id: int) -> CartOperationResult:
        """
        Remove a line from the cart.

        Args:
            user_id: User identifier
            product_id: Product of the line

        Returns:
            Result carrying the removed line and the new totals
        """
        cart = await self.get_cart(user_id)
        line = cart.remove_line(product_id)
        if line is None:
            return CartOperationResult(
                success=False,
                message="❌ El producto no está en el carrito",
                error_code=PRODUCT_NOT_IN_CART,
            )
        await self._carts.save(cart)
        return CartOperationResult(
            success=True,
            message=f"✅ {line.name} eliminado del carrito",
            line=line,
            totals=cart.totals(),
        )

    async def get_totals(self, user_id: str) -> CartTotals:
        """Aggregated totals of the user's cart."""
        return (await self.get_cart(user_id)).totals()

    async def clear(self, user_id: str) -> None:
        """Empty the cart (idempotent)."""
        await self._carts.delete(user_id)

    async def has_items(self, user_id: str) -> bool:
        """True when the cart has at least one line."""
        return not (await self.get_cart(user_id)).is_empty()

    async def order_line_items(self, user_id: str) -> list[OrderLineItem]:
        """
        Convert the cart into backend order line items.

        Args:
            user_id: User identifier

        Returns:
            One line item per cart line
        """
        cart = await self.get_cart(user_id)
        return [
            OrderLineItem(product_id=line.product_id, quantity=line.quantity)
            for line in cart.lines
        ]
