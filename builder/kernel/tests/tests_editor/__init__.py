"""
Property editor tests.

Test Files:
1. test_editor_form.py - Form generation and grouping
2. test_editor_coercion.py - Per-kind value coercion and commits
"""
