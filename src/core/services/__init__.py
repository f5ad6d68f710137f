"""Services orchestrating the domain against the interfaces."""
