"""Cart and order message formatter for WhatsApp replies."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.application.dtos.order import CustomerOrder
from app.application.use_cases.user_messages_es import PAYMENT_EMAIL, STORE_ADDRESS, STORE_HOURS
from app.domain.entities.cart import BULK_THRESHOLD, Cart
from app.domain.entities.conversation_state import AmbiguousOption, OrderDraft
from app.domain.value_objects.delivery import Courier, DeliveryMethod
from app.domain.value_objects.money_clp import format_clp

SEPARATOR = "━━━━━━━━━━━━━━━━━━━━"


@dataclass(frozen=True)
class AddedItem:
    """Product added to the cart during order capture."""

    name: str
    quantity: int


@dataclass(frozen=True)
class RejectedItem:
    """Requested product that could not be added."""

    name: str
    reason: Optional[str] = None


def _units(quantity: int) -> str:
    return "unidad" if quantity == 1 else "unidades"


class OrderMessageFormatter:
    """Formats carts, order drafts and backend orders."""

    @staticmethod
    def format_cart_summary(cart: Cart) -> str:
        """
        Format the cart with per-line pricing and totals.

        Args:
            cart: Cart to summarize

        Returns:
            Cart summary, or an empty-cart notice
        """
        if cart.is_empty():
            return "🛒 Tu carrito está vacío"

        totals = cart.totals()
        summary = "🛒 *Resumen del Carrito*\n\n"
        for index, line in enumerate(cart.lines, start=1):
            bulk_icon = "🔥 " if line.bulk_price_applied else ""
            summary += f"{index}. {bulk_icon}*{line.name}*\n"
            summary += f"   Cantidad: {line.quantity} x {format_clp(line.applied_price)}\n"
            summary += f"   Subtotal: {format_clp(line.line_total)}\n"
            if line.bulk_price_applied:
                saving = line.subtotal_at_unit_price - line.line_total
                summary += f"   _Precio por mayor aplicado - Ahorras {format_clp(saving)}_\n"
            summary += "\n"

        summary += f"{SEPARATOR}\n"
        summary += f"*Total de productos:* {totals.unit_count} {_units(totals.unit_count)}\n"
        if totals.discount > 0:
            summary += f"*Subtotal:* {format_clp(totals.subtotal_at_unit_price)}\n"
            summary += f"*Descuento:* -{format_clp(totals.discount)} 🔥\n"
        summary += f"*TOTAL:* {format_clp(totals.total)}\n"

        if totals.discounted_line_count > 0:
            summary += (
                f"\n💡 _Tienes {totals.discounted_line_count} producto(s) con precio por mayor "
                f"({BULK_THRESHOLD}+ unidades)_"
            )
        return summary

    @staticmethod
    def format_processing_summary(
        added: list[AddedItem],
        ambiguous: list[AmbiguousOption],
        rejected: list[RejectedItem],
    ) -> str:
        """
        Summarize how a free-text product list was resolved.

        Args:
            added: Items added directly to the cart
            ambiguous: Numbered options for products with several matches
            rejected: Items not found or not addable

        Returns:
            Summary grouped into added, ambiguous and not found
        """
        summary = "📊 *Resumen del procesamiento:*\n\n"

        if added:
            summary += f"✅ *Agregados al carrito ({len(added)}):*\n"
            for index, item in enumerate(added, start=1):
                summary += f"{index}. {item.name} x{item.quantity}\n"
            summary += "\n"

        if ambiguous:
            groups: dict[str, list[AmbiguousOption]] = {}
            for option in ambiguous:
                groups.setdefault(option.requested_name, []).append(option)

            summary += f"⚠️ *Productos con múltiples opciones ({len(groups)}):*\n"
            summary += "Por favor, selecciona cuál deseas:\n\n"
            for requested_name, options in groups.items():
                quantity = options[0].requested_quantity
                summary += f"🔸 *{requested_name}* ({quantity} {_units(quantity)}):\n"
                for option in options:
                    stock_icon = "✅" if option.product.in_stock else "❌"
                    summary += f"   {option.number}. {stock_icon} {option.product.name}\n"
                    summary += (
                        f"      {format_clp(option.product.unit_price)} "
                        f"(Stock: {option.product.stock})\n"
                    )
                summary += "\n"

        if rejected:
            summary += f"❌ *No encontrados o sin stock ({len(rejected)}):*\n"
            for index, item in enumerate(rejected, start=1):
                summary += f"{index}. {item.name}"
                if item.reason:
                    summary += f" - {item.reason}"
                summary += "\n"
            summary += "\n"

        return summary

    @staticmethod
    def format_selection_result(added: list[AddedItem], errors: list[str]) -> str:
        """Summarize the outcome of an ambiguous-product selection."""
        message = "📊 *Resultado de la selección:*\n\n"
        if added:
            message += "✅ *Agregados al carrito:*\n"
            for item in added:
                message += f"• {item.name} x{item.quantity}\n"
            message += "\n"
        if errors:
            message += "❌ *Errores:*\n"
            for error in errors:
                message += f"• {error}\n"
            message += "\n"
        return message

    @staticmethod
    def format_confirmation_summary(cart: Cart, draft: OrderDraft) -> str:
        """
        Format the full order summary shown before submission.

        Args:
            cart: Cart being ordered
            draft: Delivery data captured so far

        Returns:
            Itemized summary with totals, delivery data and the two valid commands
        """
        totals = cart.totals()
        summary = "📋 *RESUMEN COMPLETO DE TU PEDIDO*\n\n"
        summary += "🛒 *Productos:*\n"
        for index, line in enumerate(cart.lines, start=1):
            bulk_icon = "🔥 " if line.bulk_price_applied else ""
            summary += f"{index}. {bulk_icon}{line.name}\n"
            summary += (
                f"   {line.quantity} x {format_clp(line.applied_price)} = "
                f"{format_clp(line.line_total)}\n"
            )

        summary += f"\n{SEPARATOR}\n"
        if totals.discount > 0:
            summary += f"*Subtotal:* {format_clp(totals.subtotal_at_unit_price)}\n"
            summary += f"*Descuento (precio por mayor):* -{format_clp(totals.discount)} 🔥\n"
        summary += f"*TOTAL:* {format_clp(totals.total)}\n\n"

        summary += "📦 *Modalidad de entrega:*\n"
        if draft.delivery_method == DeliveryMethod.PICKUP:
            summary += "🏪 Retiro en tienda\n"
            summary += f"📍 {STORE_ADDRESS}\n"
        else:
            courier = draft.courier.display_name if draft.courier else "No especificado"
            summary += "🚚 Envío a domicilio\n"
            summary += f"📍 *Dirección:* {draft.address}\n"
            summary += f"🏙️ *Ciudad:* {draft.city}\n"
            summary += f"📮 *Comuna:* {draft.district}\n"
            summary += f"🚛 *Courier:* {courier}\n"

        summary += f"\n{SEPARATOR}\n\n"
        summary += "Para confirmar tu pedido, escribe:\n*confirmar*\n\n"
        summary += "Para cancelar, escribe:\n*cancelar*\n\n"
        summary += "Escribe tu respuesta:"
        return summary

    @staticmethod
    def format_order_created(
        order_id: str, total: int, delivery_method: DeliveryMethod, courier: Courier
    ) -> str:
        """
        Format the success message with payment instructions.

        Args:
            order_id: Backend order identifier
            total: Order total computed from the local cart
            delivery_method: Chosen delivery modality
            courier: Courier sent to the backend

        Returns:
            Success message
        """
        if delivery_method == DeliveryMethod.PICKUP:
            delivery = f"🏪 *Retiro en tienda:*\n📍 {STORE_ADDRESS}\n🕒 {STORE_HOURS}"
        else:
            delivery = (
                f"🚚 *Envío a domicilio:*\n🚛 Courier: {courier.display_name}\n"
                "⏰ Tiempo estimado: 1-5 días hábiles"
            )

        return (
            "✅ *¡Pedido creado exitosamente!*\n\n"
            "🎉 Tu pedido ha sido registrado en nuestro sistema.\n\n"
            f"📋 *Número de pedido:* #{order_id}\n"
            f"💰 *Total:* {format_clp(total)}\n\n"
            f"{SEPARATOR}\n\n"
            "💳 *INSTRUCCIONES DE PAGO:*\n\n"
            "1️⃣ Realiza una transferencia bancaria por el monto total\n"
            "2️⃣ Envía el comprobante al correo:\n"
            f"   📧 *{PAYMENT_EMAIL}*\n"
            "3️⃣ En el asunto del correo escribe:\n"
            f"   *Pedido #{order_id}*\n\n"
            "⚠️ *Importante:* Tu pedido será procesado una vez confirmemos el pago.\n\n"
            f"{SEPARATOR}\n\n"
            f"{delivery}\n\n"
            "¡Gracias por tu compra! 😊"
        )

    @staticmethod
    def _format_order_date(value: Optional[str]) -> str:
        if not value:
            return "Fecha desconocida"
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return "Fecha desconocida"
        return parsed.strftime("%d-%m-%Y, %H:%M")

    @staticmethod
    def format_customer_orders(orders: list[CustomerOrder]) -> str:
        """
        Format the customer's orders in progress.

        Args:
            orders: Orders listed by the backend (non-empty)

        Returns:
            One block per order with date, status, payment, total and items
        """
        message = "📦 *Tus Pedidos en Curso*\n\n"
        for order in orders:
            date = OrderMessageFormatter._format_order_date(order.created_at)
            message += f"*Pedido #{order.order_id}* ({date})\n"
            message += f"Estado: *{order.status.upper()}*\n"
            if order.payment_status:
                message += f"Pago: *{order.payment_status.upper()}*\n"
            message += f"Total: {format_clp(order.total)}\n"
            if order.items:
                items = ", ".join(f"{item.quantity}x {item.name}" for item in order.items)
                message += f"Productos: {items}\n"
            message += "\n-------------------\n"
        message += "\nSi necesitas ayuda con algún pedido, contacta a soporte."
        return message
