"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt widgets) or the Visualization (PyVista).
It deals with classification, coefficient generation, formatting and meshing.
"""
