"""
The MODEL layer contains pure data structures and the dataset generators.
It has NO knowledge of the GUI (Qt) or the plotting (pyqtgraph).
"""
