"""
Placement protocol tests.

Test Files:
1. test_placement_protocol.py - Drag session transitions and effects
2. test_placement_transfer.py - Drag payload encoding and decode failures
"""
