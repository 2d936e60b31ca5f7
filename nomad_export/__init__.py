"""
nomad-export - snapshot namespaces and jobs from a Nomad cluster
"""

__version__ = "0.1.0"
