"""
Rendering Module
===============

HTML generation, browser rasterization and LaTeX typesetting of tables.

Components:
- html_generator: Build the styled HTML table document
- png_generator: Rasterize HTML files to PNG with a headless browser
- typeset_generator: Build LaTeX longtables for PDF output
- renderer: TableRenderer entry points
- presets: Fixed header label sets
- templates: jinja2 templates for HTML and LaTeX output
"""
