"""Building blocks for agent workflows: JSON values, markdown, sagas, knowledge, memory and task stores, and an MCP client over stdio."""

__version__ = "0.1.0"