"""List supported languages and their example snippets."""

from ..errors import UnsupportedLanguage
from ..parser import LANGUAGE_REGISTRY, get_language_spec, scan


def list_languages() -> dict:
    """List all supported languages.

    Returns:
        Dict with count and language metadata
    """
    languages = [
        {
            "id": spec.id,
            "name": spec.name,
            "extension": spec.extension,
            "extensions": list(spec.extensions),
            "keywords": list(spec.keywords),
        }
        for spec in LANGUAGE_REGISTRY.values()
    ]

    return {
        "count": len(languages),
        "languages": languages
    }


def get_language_example(language: str) -> dict:
    """Get the example snippet for a language together with its symbols."""
    try:
        spec = get_language_spec(language)
    except UnsupportedLanguage as e:
        return {"error": e.message, "code": e.error_name, "details": e.details}

    symbols = scan(spec.example, spec.id)

    return {
        "language": spec.id,
        "name": spec.name,
        "extension": spec.extension,
        "example": spec.example,
        "symbols": [s.to_dict() for s in symbols],
    }
