"""Practice Unix shell over an in-memory filesystem, served over MCP."""
