"""
Renderer tests.

Test Files:
1. test_renderer_component_types.py - One block of tests per component type
2. test_renderer_canvas.py - Canvas frame, palette, and HTML serialization
"""
