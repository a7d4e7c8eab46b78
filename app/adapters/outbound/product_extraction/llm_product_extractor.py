"""Language-model backed product extractor."""

import json
import math
from typing import Optional

from app.application.dtos.extraction import ExtractedItem
from app.application.errors import ProductExtractionError
from app.application.ports.llm_client import LLMClient
from app.application.ports.product_extractor import ProductExtractor

MAX_TERM_LENGTH = 50

CATALOG_OVERVIEW = """PRODUCTOS QUE VENDEMOS (ejemplos, no limitativo):
- Frutos secos: almendras, nueces, maní, pistachos, castañas, avellanas, etc.
- Hierbas: menta, albahaca, romero, tomillo, cilantro, orégano, etc.
- Tés e infusiones: té verde, té negro, té rojo, tisanas, etc.
- Condimentos: comino, pimienta, pimentón, ajo, cebolla, etc.
- Especias: canela, clavo, jengibre, cúrcuma, curry, cardamomo, etc.
- Frutas deshidratadas: mango, piña, durazno, arándanos, pasas, higos, etc.
- Dulces y gomitas: gomitas, caramelos, dulces, etc.
- Chocolates y cacao: cacao, chocolate, cocoa, etc.
- Semillas: chía, linaza, sésamo, girasol, etc."""

SINGLE_TERM_PROMPT = f"""Eres un asistente experto en identificar términos de búsqueda de productos en mensajes de clientes de "El Manicero", una tienda especializada.

{CATALOG_OVERVIEW}

Tu tarea es EXTRAER el término de búsqueda del producto mencionado en el mensaje del cliente.

REGLAS:
1. Extrae solo el NOMBRE o TÉRMINO DE BÚSQUEDA del producto mencionado.
2. NO inventes productos que no están en el mensaje.
3. Ignora palabras de consulta como "tienen", "hay", "venden".
4. Si menciona una variación específica (ej: "cacao amargo"), extrae el término completo.
5. Si NO se menciona ningún producto, responde exactamente: null

EJEMPLOS:
- "Tienen cacao amargo?" → cacao amargo
- "Cuánto cuestan las almendras?" → almendras
- "Hola, cómo están?" → null

Responde ÚNICAMENTE con el término (en minúsculas, sin comillas, sin puntos) o "null"."""

MULTIPLE_PROMPT = f"""Eres un asistente experto en extraer productos y cantidades de mensajes de clientes de "El Manicero".

{CATALOG_OVERVIEW}

Tu tarea es EXTRAER TODOS los productos mencionados con sus cantidades.

REGLAS:
1. Extrae TODOS los productos mencionados, no solo el primero.
2. Si NO se menciona cantidad, asume cantidad = 1.
3. Si el número está seguido de "kilo", "kg", "gramos", "paquetes", ese número es la cantidad.
4. Maneja separadores: comas, saltos de línea, "y", "también", "además".
5. Si NO se menciona ningún producto, responde EXACTAMENTE: []

FORMATO DE RESPUESTA (JSON):
[{{"nombre": "producto1", "cantidad": 2}}, {{"nombre": "producto2", "cantidad": 1}}]

Responde ÚNICAMENTE con el JSON (sin markdown, sin explicaciones)."""


class LLMProductExtractor(ProductExtractor):
    """Extracts products by prompting an LLM client."""

    def __init__(self, llm_client: LLMClient) -> None:
        """
        Initialize extractor.

        Args:
            llm_client: LLM client used for completions
        """
        self._llm_client = llm_client

    async def extract_single_term(self, text: str) -> Optional[str]:
        """
        Extract the main product search term.

        Args:
            text: User message

        Returns:
            Lowercased search term, or None if no product is mentioned

        Raises:
            ProductExtractionError: If the LLM call fails
        """
        try:
            reply = await self._llm_client.complete(
                SINGLE_TERM_PROMPT,
                text,
                max_tokens=30,
                temperature=0.1,
            )
        except Exception as err:
            raise ProductExtractionError(str(err)) from err

        term = reply.strip().strip("\"'.").lower()
        if not term or term == "null" or len(term) > MAX_TERM_LENGTH:
            return None
        return term

    async def extract_multiple_with_quantities(self, text: str) -> list[ExtractedItem]:
        """
        Extract every product mention with its quantity.

        Args:
            text: User message

        Returns:
            Extracted items (entries without a valid name are dropped)

        Raises:
            ProductExtractionError: If the LLM call fails or the reply is not a JSON array
        """
        try:
            reply = await self._llm_client.complete(
                MULTIPLE_PROMPT,
                text,
                max_tokens=500,
                temperature=0.1,
            )
        except Exception as err:
            raise ProductExtractionError(str(err)) from err

        cleaned = reply.replace("```json", "").replace("```", "").strip()
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as err:
            raise ProductExtractionError(f"Invalid JSON from LLM: {cleaned[:100]}") from err

        if not isinstance(parsed, list):
            raise ProductExtractionError("LLM reply is not a JSON array")

        items: list[ExtractedItem] = []
        for entry in parsed:
            if not isinstance(entry, dict):
                continue
            name = entry.get("nombre")
            if not isinstance(name, str) or not name.strip():
                continue
            quantity = entry.get("cantidad")
            if isinstance(quantity, bool) or not isinstance(quantity, (int, float)) or quantity <= 0:
                quantity = 1
            items.append(
                ExtractedItem(name=name.strip().lower(), quantity=max(1, math.floor(quantity)))
            )
        return items
