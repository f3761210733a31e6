"""AgentLink: connectors between agent systems and collaboration services"""

__version__ = "0.1.0"
