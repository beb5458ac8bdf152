"""
The VIEW layer: Qt widgets and the PyVista plot.
Widgets only talk to controllers; they never call the model directly except
for read-only formatting helpers.
"""
