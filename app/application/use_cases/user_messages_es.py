"""Spanish user-facing messages for the El Manicero Lucas WhatsApp bot."""

from app.domain.value_objects.money_clp import format_clp

STORE_ADDRESS = "Pasaje Rosas 842 Local 5, Recoleta"
STORE_HOURS = "Lun-Vie 7:30-16:30, Sáb 7:30-14:00"
PAYMENT_EMAIL = "elamanicerolucas@gmail.com"

_MENU_OPTIONS = (
    "*1* - Consultas sobre productos\n"
    "*2* - Pedidos  \n"
    "*3* - Preguntas frecuentes"
)

_MORE_HELP = '¿Necesitas algo más? Escribe *"menu"* para ver todas las opciones.'


class UserMessagesES:
    """Centralized Spanish user-facing messages."""

    # Welcome and registration
    WELCOME_NEW_USER = (
        "¡Hola! 👋 \n\n"
        "¡Bienvenido/a! Somos El Manicero Lucas y estamos aquí para ayudarte.\n\n"
        "Para brindarte un mejor servicio, necesitamos registrarte.\n\n"
        "Por favor, escribe tu *nombre* y *apellido*:"
    )
    ASK_FULL_NAME = "Por favor, ingresa tu *nombre* y *apellido* separados por un espacio:"
    INVALID_FIRST_NAME = "Por favor, ingresa un nombre válido (mínimo 2 caracteres):"
    INVALID_LAST_NAME = "Por favor, ingresa un apellido válido (mínimo 2 caracteres):"
    REGISTRATION_UNAVAILABLE = (
        "⚠️ *Servicio temporalmente no disponible*\n\n"
        "No pudimos completar tu registro en este momento.\n"
        "Por favor, intenta nuevamente en unos minutos."
    )

    @staticmethod
    def welcome_returning_user(name: str) -> str:
        """Greeting for a customer already registered in the backend."""
        return (
            f"¡Hola de nuevo, {name}! 👋\n\n"
            "¡Qué gusto verte por aquí otra vez! 😊\n\n"
            "¿En qué podemos ayudarte hoy?\n\n"
            "Por favor, selecciona una opción:\n"
            f"{_MENU_OPTIONS}\n\n"
            "Escribe el número de la opción que necesites. 💬"
        )

    @staticmethod
    def registration_completed(name: str) -> str:
        """Confirmation shown after a successful registration."""
        return (
            f"¡Excelente, {name}! ✅\n\n"
            "Tu registro ha sido completado exitosamente.\n\n"
            "¿En qué podemos ayudarte hoy?\n\n"
            "Por favor, selecciona una opción:\n"
            f"{_MENU_OPTIONS}\n\n"
            "Escribe el número de la opción que necesites. 💬"
        )

    # Main menu and submenus
    MAIN_MENU = (
        "📋 *Menú Principal*\n\n"
        "Por favor, selecciona una opción:\n"
        f"{_MENU_OPTIONS}\n\n"
        "Escribe el número de la opción que necesites."
    )
    INVALID_MENU_OPTION = (
        "❌ Opción no válida. \n\n"
        "Por favor, selecciona una opción válida:\n"
        f"{_MENU_OPTIONS}\n\n"
        "Escribe solo el número (1, 2 o 3):"
    )
    PRODUCTS_INFO = (
        "🛍️ *Consultas sobre Productos*\n\n"
        "¡Perfecto! Estamos aquí para ayudarte con información sobre nuestros productos.\n\n"
        "Puedes preguntarnos sobre:\n"
        "• Catálogo de productos disponibles\n"
        "• Precios y promociones\n"
        "• Características y especificaciones\n"
        "• Disponibilidad en stock\n\n"
        "¿Qué te gustaría saber sobre nuestros productos? \n\n"
        'Escribe tu consulta o *"menu"* para volver al menú principal.'
    )
    ORDERS_MENU = (
        "📦 *Sección de Pedidos*\n\n"
        "Selecciona una opción:\n\n"
        "*1* - Crear nuevo pedido\n"
        "*2* - Mis pedidos en curso\n\n"
        "Escribe el número de la opción (1 o 2).\n"
        'O escribe *"menu"* para volver al menú principal.'
    )
    INVALID_ORDERS_MENU_OPTION = (
        "⚠️ Opción no válida.\n\n"
        "Por favor, selecciona:\n"
        "*1* - Crear nuevo pedido\n"
        "*2* - Mis pedidos en curso\n\n"
        "Escribe el número (1 o 2):"
    )
    FAQ_MENU = (
        "❓ *Preguntas Frecuentes*\n\n"
        "Selecciona el tema que te interesa:\n\n"
        "*1.* 🕒 Horarios de atención\n"
        "*2.* 📍 Ubicación y cómo llegar\n"
        "*3.* 📦 Pedidos y entregas a domicilio\n"
        "*4.* 🚚 Empresas de despacho\n"
        "*5.* 💳 Formas de pago\n"
        "*6.* 📞 Contactar soporte\n\n"
        "Escribe el número de la pregunta que te interesa, o escribe tu propia consulta.\n\n"
        'También puedes escribir *"menu"* para volver al menú principal.'
    )

    # FAQ answers, keyed by the detector category
    FAQ_ANSWERS = {
        "horarios": (
            "🕒 *Horarios de Atención*\n\n"
            "Nuestros horarios son:\n"
            "• *Lunes a Viernes:* 7:30 AM - 16:30 PM\n"
            "• *Sábados:* 7:30 AM - 14:00 PM  \n"
            "• *Domingos:* Cerrado\n\n"
            f"{_MORE_HELP}"
        ),
        "ubicacion": (
            "📍 *Ubicación del Local*\n\n"
            "Nos encontramos en:\n"
            "*Dirección:* Pasaje Rosas 842 Local 5, Recoleta\n"
            "*Referencia:* Avenida La Paz 271\n"
            "*Ciudad:* Santiago\n\n"
            "*¿Cómo llegar?*\n"
            "• En transporte público: Línea 2 metros Puente Cal y Canto o Patronato\n"
            "• En vehículo: Hay estacionamiento dentro de La Vega Central o en Avenida La Paz\n\n"
            f"{_MORE_HELP}"
        ),
        "pedidos": (
            "📦 *Pedidos y Entregas*\n\n"
            "¡Sí! Realizamos entregas a domicilio:\n\n"
            "*Condiciones:*\n"
            "• Despachos sobre compras mayores a $50.000\n"
            "• Despachos solo a Regiones\n"
            "• Horario de despachos: 9:00 AM - 15:00 PM\n\n"
            "*¿Cómo hacer un pedido?*\n"
            "• Por WhatsApp (este chat)\n"
            "• Llamada telefónica: +1234567890\n\n"
            f"{_MORE_HELP}"
        ),
        "despacho": (
            "🚚 *Empresas de Despacho*\n\n"
            "Trabajamos con las siguientes empresas de confianza:\n\n"
            "• *Starken*\n"
            "• *Varmontt* \n"
            "• *Chevalier*\n"
            "• *Pullman Cargo*\n\n"
            "*Tiempos de entrega:*\n"
            "• Regiones: 1-5 días hábiles\n\n"
            f"{_MORE_HELP}"
        ),
        "pago": (
            "💳 *Formas de Pago*\n\n"
            "Aceptamos múltiples formas de pago:\n\n"
            "*En el local:*\n"
            "• Efectivo\n"
            "• Tarjetas débito\n"
            "• Transferencias bancarias\n\n"
            "*Para entregas:*\n"
            "• Pago contra entrega (efectivo o débito)\n"
            "• Transferencia previa\n\n"
            f"{_MORE_HELP}"
        ),
        "soporte": (
            "📞 *Contactar Soporte*\n\n"
            "Puedes contactarnos:\n"
            "• WhatsApp: Este mismo chat\n"
            "• Teléfono: +1234567890\n"
            "• Email: soporte@elmanicero.com\n\n"
            f"{_MORE_HELP}"
        ),
    }
    FAQ_OPTIONS = {
        "1": "horarios",
        "2": "ubicacion",
        "3": "pedidos",
        "4": "despacho",
        "5": "pago",
        "6": "soporte",
    }

    @staticmethod
    def faq_question_received(question: str) -> str:
        """Acknowledge a free-text question that no FAQ answer covers."""
        return (
            f'❓ Pregunta recibida: "{question}"\n\n'
            "Un representante revisará tu consulta y te responderá pronto.\n\n"
            '¿Algo más? Escribe *"menu"* para volver al menú principal.'
        )

    # My orders
    MY_ORDERS_EMPTY = (
        "ℹ️ *No tienes pedidos en curso actualmente.*\n\n"
        "¿Deseas realizar uno nuevo?\n"
        'Escribe *"crear pedido"* o selecciona la opción 1 del menú de pedidos.'
    )
    MY_ORDERS_ERROR = (
        "❌ Hubo un error al consultar tus pedidos. Por favor, intenta nuevamente más tarde."
    )
    MY_ORDERS_MISSING_CUSTOMER = (
        "❌ Error interno: No pudimos recuperar tu identificación de cliente."
    )

    # Router shortcuts
    HELP = (
        "Por supuesto, estoy aquí para ayudarte. 😊\n\n"
        "Escribe *menú* para ver todas las opciones disponibles o dime específicamente "
        "qué necesitas."
    )
    EMPATHETIC_REDIRECT = (
        "Entiendo que puedas estar frustrado. 😔\n\n"
        "Estoy aquí para ayudarte de la mejor manera posible. ¿Podrías decirme "
        "específicamente en qué puedo asistirte?\n\n"
        "Escribe *menú* para ver todas las opciones disponibles."
    )
    GENERIC_ERROR = (
        "❌ Lo siento, ocurrió un error inesperado.\n\n"
        'Por favor, intenta nuevamente o escribe *"menú"* para volver al menú principal.'
    )

    FAREWELL_RESPONSES = {
        "gratitud": (
            "¡De nada! 😊 Fue un placer ayudarte.\n\n"
            "¡Que tengas un excelente día! Si necesitas algo más en el futuro, "
            "no dudes en contactarnos."
        ),
        "despedida": (
            "¡Hasta luego! 👋 \n\n"
            "Gracias por contactarnos. ¡Que tengas un día maravilloso!"
        ),
        "despedida_temporal": (
            "¡Hasta pronto! 😊\n\n"
            "Estaremos aquí cuando nos necesites. ¡Cuídate mucho!"
        ),
        "buenos_deseos": (
            "¡Igualmente! 🌟\n\n"
            "Que tengas un día lleno de bendiciones. ¡Hasta la próxima!"
        ),
        "finalizacion": (
            "¡Perfecto! ✅\n\n"
            "Me alegra haber podido ayudarte. ¡Que tengas un excelente día!"
        ),
        "despedida_general": (
            "¡Hasta luego! 👋\n\n"
            "Fue un gusto atenderte. ¡Que tengas un día fantástico!"
        ),
    }

    @staticmethod
    def farewell(category: str) -> str:
        """Farewell reply for a detector category."""
        return UserMessagesES.FAREWELL_RESPONSES.get(
            category, UserMessagesES.FAREWELL_RESPONSES["despedida_general"]
        )

    # Session lifecycle notices
    SESSION_EXPIRED = (
        "⏰ *Sesión Expirada*\n\n"
        "Tu sesión ha expirado por inactividad (15 minutos).\n\n"
        "¡Hola de nuevo! 👋 Empecemos una nueva conversación."
    )
    SESSION_WARNING = (
        "⚠️ *Advertencia de Sesión*\n\n"
        "Tu conversación será finalizada automáticamente en *3 minutos* por inactividad.\n\n"
        "Si deseas continuar, simplemente envía cualquier mensaje."
    )
    CONTEXT_RESET = (
        "⏳ *Reinicio por Inactividad*\n\n"
        "Por inactividad (8 min), hemos vuelto al menú principal.\n"
        "Tu sesión sigue activa y tu carrito (si tienes uno) se mantiene guardado."
    )

    @staticmethod
    def session_finished(cart_discarded: bool) -> str:
        """Notice sent when the monitor ends an inactive session."""
        message = (
            "🔚 *Conversación Finalizada*\n\n"
            "Tu sesión ha sido finalizada automáticamente por inactividad."
        )
        if cart_discarded:
            message += (
                "\n\n⚠️ *Nota:* Tu carrito de compras ha sido eliminado por inactividad."
            )
        message += (
            "\n\n¡Gracias por contactarnos! Si necesitas ayuda nuevamente, "
            "simplemente envía un mensaje."
        )
        return message

    # Product search
    SEARCH_RESTART_ERROR = (
        "Lo siento, hubo un error. Por favor, intenta buscar de nuevo.\n\n"
        'Escribe *"menú"* para volver al menú principal.'
    )
    SEARCH_DETAILS_ERROR = (
        'Lo siento, hubo un error. Escribe *"menú"* para volver al menú principal.'
    )

    @staticmethod
    def search_details_reprompt(product_name: str) -> str:
        """Re-prompt for an unrecognized reply while showing product details."""
        return (
            "No entendí tu respuesta.\n\n"
            f'¿Deseas agregar *"{product_name}"* a tu pedido?\n\n'
            "Responde:\n"
            '• *"sí"* para agregar al carrito\n'
            '• *"no"* para buscar otro producto\n'
            '• *"menú"* para volver al menú principal'
        )

    # Order capture
    ORDER_START = (
        "🛒 *¡Hagamos tu pedido!*\n\n"
        "Estoy aquí para ayudarte a crear tu pedido de forma rápida y sencilla.\n\n"
        "*¿Cómo funciona?*\n"
        "• Escribe la lista de productos que deseas\n"
        '• Puedes incluir cantidades (ej: "3 almendras, 2 nueces")\n'
        "• Si no mencionas cantidad, asumo que quieres 1 unidad\n"
        "• Puedes separarlos por comas o saltos de línea\n\n"
        "*Ejemplos:*\n"
        '_"Quiero 3 almendras, 2 nueces y té verde"_\n'
        '_"almendras\nnueces\npistachos"_\n'
        '_"5 kilos de pasas, canela"_\n\n'
        "📝 *Escribe tu lista de productos:*\n\n"
        'O escribe *"cancelar"* para volver al menú principal.'
    )
    ORDER_CANCELLED_TO_MENU = "❌ Pedido cancelado. Volviendo al menú..."
    EXTRACTION_UNAVAILABLE = (
        "⚠️ *Servicio de IA temporalmente no disponible*\n\n"
        "Por favor, intenta nuevamente en unos segundos o reformula tu lista de forma "
        "más simple.\n\n"
        'Ejemplo: _"2 almendras, 1 nuez, 3 pistachos"_\n\n'
        'O escribe *"cancelar"* para volver al menú.'
    )
    NO_PRODUCTS_IDENTIFIED = (
        "⚠️ *No pude identificar productos en tu mensaje*\n\n"
        "Por favor, reformula tu lista. Recuerda incluir nombres de productos como:\n"
        "• Frutos secos: almendras, nueces, maní, pistachos\n"
        "• Tés: té verde, té negro, té rojo\n"
        "• Especias: canela, jengibre, cúrcuma\n"
        "• Y muchos más...\n\n"
        "*Ejemplo:*\n"
        '_"Quiero 3 almendras y 2 nueces"_\n\n'
        "Escribe tu lista nuevamente:"
    )
    NOTHING_ADDED = (
        "❌ No se pudo agregar ningún producto.\n\n"
        "Por favor, intenta con otros productos o reformula tu lista.\n\n"
        "Escribe tu lista de productos:"
    )
    SELECTION_INSTRUCTIONS = (
        "📝 *¿Cómo seleccionar?*\n\n"
        "Escribe el número de cada producto que deseas, separados por comas.\n\n"
        "*Ejemplos:*\n"
        '_"1"_ - Solo el producto 1\n'
        '_"1, 3, 5"_ - Productos 1, 3 y 5\n'
        '_"2"_ - Solo el producto 2\n\n'
        "Si quieres cambiar la cantidad, escríbelo así:\n"
        '_"1: 5"_ - 5 unidades del producto 1\n'
        '_"2: 3, 4: 2"_ - 3 del producto 2 y 2 del producto 4\n\n'
        "Escribe tu selección:"
    )
    SELECTION_UNPARSABLE = (
        "⚠️ No pude entender tu selección.\n\n"
        "Por favor, escribe los números de los productos que deseas.\n\n"
        "*Ejemplos válidos:*\n"
        '_"1"_ - Solo el producto 1\n'
        '_"1, 2, 3"_ - Productos 1, 2 y 3\n'
        '_"1: 5"_ - 5 unidades del producto 1\n'
        '_"1: 5, 2: 3"_ - 5 del producto 1 y 3 del producto 2\n\n'
        "Escribe tu selección nuevamente:"
    )
    ADD_MORE_OPTIONS = (
        "¿Deseas hacer algo más?\n\n"
        "*1* - Agregar más productos\n"
        "*2* - Finalizar y elegir modalidad de envío\n\n"
        "Escribe el número de tu opción:"
    )
    ADD_MORE_PRODUCTS = (
        "📝 *Perfecto, agreguemos más productos*\n\n"
        "Escribe la lista de productos adicionales que deseas:\n\n"
        'O escribe *"finalizar"* si ya no quieres agregar más.'
    )
    ADD_MORE_REPROMPT = (
        "⚠️ No entendí tu respuesta.\n\n"
        "Por favor, selecciona una opción:\n\n"
        "*1* - Agregar más productos\n"
        "*2* - Finalizar y elegir modalidad de envío\n\n"
        "Escribe el número:"
    )
    MINIMUM_DECISION_REPROMPT = (
        "⚠️ No entendí tu respuesta.\n\n"
        "Por favor, selecciona una opción:\n\n"
        "*1* - Agregar más productos\n"
        "*2* - Cambiar a retiro en tienda\n"
        "*3* - Cancelar pedido\n\n"
        "Escribe el número:"
    )
    EMPTY_CART_CANNOT_FINISH = (
        "❌ Tu carrito está vacío. No puedes finalizar un pedido sin productos."
    )
    EMPTY_CART_CANNOT_CONFIRM = (
        "❌ Tu carrito está vacío. No puedes confirmar un pedido vacío."
    )
    DELIVERY_METHOD_OPTIONS = (
        "🚚 *¿Cómo quieres recibir tu pedido?*\n\n"
        "*1* 🏪 Retiro en tienda\n"
        f"     _{STORE_ADDRESS}_\n"
        f"     _Horario: {STORE_HOURS}_\n\n"
        "*2* 📦 Envío a domicilio\n"
        "     _Despachos sobre $50.000_\n"
        "     _Solo a Regiones_\n\n"
        "Escribe el número de tu opción (1 o 2):"
    )
    INVALID_DELIVERY_METHOD = (
        "⚠️ Opción no válida.\n\n"
        "Por favor, selecciona:\n\n"
        "*1* - Retiro en tienda\n"
        "*2* - Envío a domicilio\n\n"
        "Escribe el número (1 o 2):"
    )
    PICKUP_SELECTED = (
        "✅ *Retiro en tienda seleccionado*\n\n"
        "Retirarás tu pedido en:\n"
        f"📍 {STORE_ADDRESS}\n"
        f"🕒 Horario: {STORE_HOURS}\n\n"
        "Te notificaremos cuando tu pedido esté listo para retirar."
    )
    DELIVERY_SELECTED = (
        "✅ *Envío a domicilio seleccionado*\n\n"
        "📦 Despachos solo a Regiones\n"
        "⏰ Horario de despacho: 9:00 AM - 3:00 PM\n"
        "🚚 Tiempo estimado: 1-5 días hábiles\n\n"
        "Por favor, proporciona tu *dirección de envío completa*:\n\n"
        "_Ejemplo: Avenida Principal 123, Departamento 4B_"
    )
    ADDRESS_TOO_SHORT = (
        "⚠️ La dirección parece muy corta.\n\n"
        "Por favor, proporciona una dirección completa:\n\n"
        "_Ejemplo: Avenida Principal 123, Departamento 4B_"
    )
    CITY_TOO_SHORT = (
        "⚠️ El nombre de la ciudad parece muy corto.\n\n"
        "Por favor, ingresa tu ciudad nuevamente:"
    )
    DISTRICT_TOO_SHORT = (
        "⚠️ El nombre de la comuna parece muy corto.\n\n"
        "Por favor, ingresa tu comuna nuevamente:"
    )
    COURIER_OPTIONS = (
        "*1* Starken\n"
        "*2* Chevalier\n"
        "*3* Varmontt"
    )
    INVALID_COURIER = (
        "⚠️ Opción no válida.\n\n"
        "Por favor, selecciona una empresa de despacho:\n\n"
        f"{COURIER_OPTIONS}\n\n"
        "Escribe el número (1, 2 o 3):"
    )
    ORDER_PROCESSING = "⏳ Procesando tu pedido, por favor espera..."
    ORDER_SESSION_ERROR = (
        "❌ *Error de sesión*\n\n"
        "No se pudo identificar tu cuenta de cliente. Por favor, vuelve al menú "
        "principal e inicia sesión nuevamente."
    )
    ORDER_OPTIONS_LOST = (
        "❌ *Error de sesión*\n\n"
        "No se encontraron las opciones de productos guardadas. Tu pedido fue "
        "reiniciado, por favor vuelve a empezar desde el menú principal."
    )
    ORDER_CANCELLED = (
        "❌ *Pedido cancelado*\n\n"
        "Tu pedido ha sido cancelado y el carrito ha sido vaciado.\n\n"
        "Si cambias de opinión, puedes iniciar un nuevo pedido desde el menú principal."
    )
    CONFIRMATION_REPROMPT = (
        "⚠️ No entendí tu respuesta.\n\n"
        "Para confirmar tu pedido, escribe:\n"
        "*confirmar pedido*\n\n"
        "Para cancelar, escribe:\n"
        "*cancelar*\n\n"
        "Escribe tu respuesta:"
    )

    @staticmethod
    def minimum_not_reached(current_total: int, minimum: int) -> str:
        """Explain that the cart does not reach the delivery minimum."""
        return (
            "⚠️ *Monto mínimo no alcanzado*\n\n"
            f"Para envíos a domicilio, el pedido debe ser mayor a {format_clp(minimum)}.\n\n"
            f"Tu pedido actual: {format_clp(current_total)}\n"
            f"Falta: {format_clp(minimum - current_total)}\n\n"
            "¿Deseas agregar más productos o cambiar a retiro en tienda?\n\n"
            "*1* - Agregar más productos\n"
            "*2* - Cambiar a retiro en tienda\n"
            "*3* - Cancelar pedido"
        )

    @staticmethod
    def address_saved(address: str) -> str:
        """Confirm the delivery address and ask for the city."""
        return (
            f"✅ Dirección guardada: {address}\n\n"
            "Ahora, ingresa tu *ciudad*:\n\n"
            "_Ejemplo: Santiago, Valparaíso, Concepción_"
        )

    @staticmethod
    def city_saved(city: str) -> str:
        """Confirm the city and ask for the district."""
        return (
            f"✅ Ciudad guardada: {city}\n\n"
            "Ahora, ingresa tu *comuna*:\n\n"
            "_Ejemplo: Las Condes, Providencia, Ñuñoa_"
        )

    @staticmethod
    def district_saved(district: str) -> str:
        """Confirm the district and ask for the courier."""
        return (
            f"✅ Comuna guardada: {district}\n\n"
            "🚚 *Selecciona la empresa de despacho de tu preferencia:*\n\n"
            f"{UserMessagesES.COURIER_OPTIONS}\n\n"
            "Todas tienen cobertura nacional con tiempos de entrega de 1-5 días hábiles.\n\n"
            "Escribe el número de tu opción (1, 2 o 3):"
        )

    @staticmethod
    def courier_selected(courier_name: str) -> str:
        """Confirm the courier choice."""
        return (
            f"✅ Empresa de despacho seleccionada: *{courier_name}*\n\n"
            "Perfecto, ya tenemos todos los datos de envío."
        )

    @staticmethod
    def order_creation_failed(detail: str) -> str:
        """Explain a failed submission; the cart is kept for a retry."""
        return (
            "❌ *Error al crear el pedido*\n\n"
            f"Detalles: {detail}\n\n"
            "Tu carrito sigue guardado. ¿Deseas intentar nuevamente?\n\n"
            "Para reintentar, escribe: *confirmar pedido*\n"
            "Para cancelar, escribe: *cancelar*\n\n"
            "Escribe tu respuesta:"
        )

    # Backend notifications
    @staticmethod
    def order_status_changed(order_id: str, status: str) -> str:
        """Status-change notice pushed by the backend."""
        return (
            "🔔 *Actualización de Pedido* 🔔\n\n"
            f"Tu pedido *#{order_id}* ha cambiado de estado a: *{status.upper()}*.\n\n"
            "Gracias por tu preferencia! 🥜"
        )
