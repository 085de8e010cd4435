from directus_setup.codegen.typescript import generate_types, render_typescript

__all__ = ["generate_types", "render_typescript"]
