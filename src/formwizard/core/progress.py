"""
Cálculo de progreso del asistente.
"""

from formwizard.errors import SchemaIntegrityError


def progress(index: int, total: int) -> float:
    """
    Porcentaje de avance al estar en la sección `index` de `total`.

    Args:
        index: Índice de la sección actual (0-based)
        total: Número total de secciones

    Returns:
        (index + 1) / total * 100
    """
    if total <= 0:
        raise SchemaIntegrityError(["form has no sections"])
    if not 0 <= index < total:
        raise ValueError(f"Section index {index} out of range for {total} sections")
    return (index + 1) / total * 100
