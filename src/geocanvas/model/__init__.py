"""
The MODEL layer contains pure data structures and geometry logic.
It has NO knowledge of the GUI (Qt).
It deals with the scene, hit-testing and label placement.
"""
