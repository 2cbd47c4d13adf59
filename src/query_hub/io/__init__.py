"""Database I/O: connections, execution handles and the raw execution layer."""
