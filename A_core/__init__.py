"""
A_core: Layout models, diagnostics interfaces, logging and exceptions.

Core abstractions for the reading-order engine including:
- Layout models (SemanticLabel, LayoutElement protocol, LayoutBox, PageRegion)
- Observer interface and decision records for cut/insertion tracing
- Centralized logging helpers
- Exception hierarchy
"""
