"""Built-in visualization modules.

Each module exposes build_descriptor() and register(catalog). Importing
a module has no side effects; mathviz.bootstrap registers them in order.
"""
