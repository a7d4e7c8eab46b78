"""Product message formatter for WhatsApp replies."""

from app.domain.entities.cart import BULK_THRESHOLD, applied_unit_price
from app.domain.value_objects.money_clp import format_clp
from app.domain.value_objects.product import LOW_STOCK_LIMIT, Product

NUMBER_EMOJIS = ("1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣", "6️⃣", "7️⃣", "8️⃣", "9️⃣", "🔟")
MAX_LISTED_PRODUCTS = len(NUMBER_EMOJIS)


class ProductMessageFormatter:
    """Formats catalog products into WhatsApp-ready Spanish messages."""

    @staticmethod
    def _stock_emoji(stock: int) -> str:
        if stock <= 0:
            return "❌"
        if stock <= LOW_STOCK_LIMIT:
            return "⚠️"
        return "✅"

    @staticmethod
    def _stock_message(stock: int) -> str:
        if stock <= 0:
            return "*Sin stock*"
        if stock <= LOW_STOCK_LIMIT:
            return f"*Stock bajo* ({stock} disponibles)"
        return f"*Disponible* ({stock} en stock)"

    @staticmethod
    def format_list(products: list[Product], search_term: str) -> str:
        """
        Format search results as numbered options.

        Args:
            products: Products found (only the first ten are listed)
            search_term: Term the customer searched for

        Returns:
            Message listing each product with price and stock
        """
        if not products:
            return ProductMessageFormatter.format_no_results(search_term)

        listed = products[:MAX_LISTED_PRODUCTS]
        message = f'🔍 *Productos encontrados para "{search_term}":*\n\n'
        for index, product in enumerate(listed):
            message += f"{NUMBER_EMOJIS[index]} *{product.name}*\n"
            message += f"   💰 {format_clp(product.unit_price)}"
            if product.has_bulk_price:
                message += f" | 📦 {format_clp(product.bulk_price)} ({BULK_THRESHOLD}+ unidades)"
            message += (
                f"\n   {ProductMessageFormatter._stock_emoji(product.stock)} "
                f"{ProductMessageFormatter._stock_message(product.stock)}\n\n"
            )

        message += "ℹ️ *¿Cuál te interesa?*\n"
        message += f"Responde con el *número* (1-{len(listed)}) para ver más detalles."
        return message

    @staticmethod
    def format_details(product: Product) -> str:
        """
        Format the full detail card of one product.

        Args:
            product: Product to describe

        Returns:
            Message with prices, bulk savings, availability and a call to action
        """
        message = f"🛍️ *{product.name}*\n\n"
        message += "💵 *Precios:*\n"
        message += f"• Precio unitario: *{format_clp(product.unit_price)}*\n"
        if product.has_bulk_price:
            saving = round((product.unit_price - product.bulk_price) / product.unit_price * 100)
            message += (
                f"• Por mayor ({BULK_THRESHOLD}+ unidades): *{format_clp(product.bulk_price)}* 📦\n"
            )
            message += f"  _¡Ahorra {saving}% comprando al por mayor!_\n"

        message += "\n📊 *Disponibilidad:*\n"
        message += (
            f"{ProductMessageFormatter._stock_emoji(product.stock)} "
            f"{ProductMessageFormatter._stock_message(product.stock)}\n"
        )
        if product.low_stock:
            message += "\n⚠️ _¡Últimas unidades disponibles!_\n"

        if product.in_stock:
            message += "\nℹ️ *¿Deseas agregar este producto a tu pedido?*\n"
            message += 'Responde *"sí"* para continuar o *"menú"* para ver otras opciones.'
        else:
            message += "\nℹ️ *Producto sin stock actualmente.*\n"
            message += '¿Te gustaría buscar otro producto? Escribe *"menú"* para ver opciones.'
        return message

    @staticmethod
    def format_no_results(search_term: str) -> str:
        """Message for a search without matches."""
        return (
            f'❌ *No encontré productos para "{search_term}"*\n\n'
            "ℹ️ *Sugerencias:*\n"
            "• Verifica la ortografía\n"
            "• Intenta con un término más general\n"
            '• Escribe *"menú"* para ver todas las opciones\n'
            "• Describe el producto de otra forma\n\n"
            '*Ejemplo:* "almendras", "nueces", "maní", "mix", etc.'
        )

    @staticmethod
    def format_api_error() -> str:
        """Message shown when the catalog cannot be reached."""
        return (
            "❌ *Lo siento, no puedo buscar productos en este momento*\n\n"
            "ℹ️ Estamos experimentando problemas técnicos temporales.\n\n"
            "Por favor:\n"
            "• Intenta nuevamente en unos momentos\n"
            '• Escribe *"menú"* para ver otras opciones\n'
            "• Contacta directamente a nuestro equipo\n\n"
            "Disculpa las molestias."
        )

    @staticmethod
    def format_invalid_selection(max_options: int) -> str:
        """Message for a selection outside the listed range."""
        return (
            "❌ *Selección no válida*\n\n"
            f"Por favor, responde con un *número entre 1 y {max_options}* "
            "para seleccionar un producto.\n\n"
            'O escribe *"menú"* para volver al menú principal.'
        )

    @staticmethod
    def format_product_added(product: Product, quantity: int = 1) -> str:
        """
        Confirm a product added to the cart.

        Args:
            product: Product added
            quantity: Units added

        Returns:
            Confirmation with the line total at the tier price
        """
        total = applied_unit_price(quantity, product.unit_price, product.bulk_price) * quantity
        return (
            "✅ *Producto agregado al carrito*\n\n"
            f"🛍️ {product.name}\n"
            f"📊 Cantidad: {quantity}\n"
            f"💰 Total: {format_clp(total)}\n\n"
            "¿Deseas agregar más productos o finalizar tu pedido?\n"
            'Escribe *"menú"* para ver opciones.'
        )

    @staticmethod
    def format_cannot_identify() -> str:
        """Message for a query in which no product could be identified."""
        return (
            "ℹ️ *No pude identificar el producto que buscas*\n\n"
            "¿Podrías ser más específico?\n\n"
            "*Ejemplos de búsqueda:*\n"
            '• "Quiero ver almendras"\n'
            '• "Cuánto cuestan las nueces?"\n'
            '• "Tienen maní con sal?"\n'
            '• "Precio de los pistachos"\n\n'
            'O escribe *"menú"* para ver todas las opciones.'
        )

    @staticmethod
    def format_search_welcome() -> str:
        """Entry message of the product search flow."""
        return (
            "🛍️ *Búsqueda de Productos*\n\n"
            "¡Perfecto! Estoy aquí para ayudarte a encontrar lo que necesitas.\n\n"
            "ℹ️ *¿Cómo buscar?*\n"
            "Simplemente escribe el nombre del producto que te interesa.\n\n"
            "*Ejemplos:*\n"
            '• "almendras"\n'
            '• "nueces"\n'
            '• "maní con sal"\n'
            '• "mix de frutos secos"\n\n'
            "¿Qué producto estás buscando?"
        )
