"""
Interaction Logic
=================
Everything between the input events and the scene store.

Why is this file needed?
------------------------
1. Sequencing: Multi-click constructions (line, angle, circle) are tracked here.
2. Dragging: Pointer drags are turned into point moves.
3. Animation: The marching-ants phase clock of the selected line.

Note: This package should be pure Python and should NOT import PySide6.
"""
