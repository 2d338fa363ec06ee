"""Infrastructure layer: template rendering, catalogues, form files."""
