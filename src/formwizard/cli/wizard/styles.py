"""
Estilos de questionary para el asistente.

Integra el sistema de temas de formwizard.cli.theme para mantener
consistencia visual.
"""

from questionary import Style

from formwizard.cli.theme import get_palette


def get_wizard_style() -> Style:
    """Obtiene el estilo de questionary basado en el tema actual."""
    p = get_palette()
    return Style([
        # Marcador de pregunta (?)
        ('qmark', f'fg:{p.accent} bold'),
        # Texto de la pregunta
        ('question', 'bold'),
        # Respuesta seleccionada/ingresada
        ('answer', f'fg:{p.success} bold'),
        # Puntero de selección
        ('pointer', f'fg:{p.accent} bold'),
        # Opción resaltada
        ('highlighted', f'fg:{p.primary} bold'),
        ('selected', f'fg:{p.success} bold'),
        # Instrucciones
        ('instruction', f'fg:{p.muted} italic'),
        ('text', ''),
        ('disabled', f'fg:{p.muted} italic'),
        ('separator', f'fg:{p.border}'),
    ])
