"""Index (package barrel) generation built on recursive discovery."""

from treefs.index.barrel import (
    collect_modules,
    delete_index,
    generate_index,
    is_module,
    render_index,
)

__all__ = ["collect_modules", "delete_index", "generate_index", "is_module", "render_index"]
