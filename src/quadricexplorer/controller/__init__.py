"""
The CONTROLLER layer glues the model to the views.
It uses Qt core objects (signals, timers, settings) but never creates widgets,
and talks to the 3D renderer only through the `SurfaceRenderer` protocol.
"""
