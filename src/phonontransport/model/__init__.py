"""
The MODEL layer contains the data structures of the transport kernel.
It deals with Geometry, Phonons, Surfaces and Cells and has NO knowledge
of the time-stepping driver or of plotting backends.
"""
