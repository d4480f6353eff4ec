"""
The VIEW layer: the render adapter and the Qt widgets that host it.
"""
