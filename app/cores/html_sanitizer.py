import bleach
from typing import Any, Dict


class HTMLSanitizer:
    """Limpia texto de usuario antes de insertarlo en los correos HTML."""

    @staticmethod
    def escape(text: str) -> str:
        """
        Escapa cualquier tag HTML; el texto se conserva visible pero inerte.

        Args:
            text: Texto a escapar

        Returns:
            Texto con los tags convertidos en entidades (&lt;a ...&gt;)
        """
        if not text:
            return ""

        return bleach.clean(text, tags=[], strip=False)

    @staticmethod
    def sanitize_strict(text: str) -> str:
        """Elimina todos los tags HTML; para campos de texto plano."""
        if not text:
            return ""

        return bleach.clean(text, tags=[], strip=True)

    @staticmethod
    def escape_context(context: Dict[str, Any]) -> Dict[str, Any]:
        """Escapa los valores de texto de un contexto de plantilla; el resto pasa igual."""
        return {
            key: HTMLSanitizer.escape(value) if isinstance(value, str) else value
            for key, value in context.items()
        }
