"""
Dockerfile Generator Package
Prints ready-made multi-stage Dockerfiles for node, python, go, rust and java projects.
"""

__version__ = "1.0.0"
__description__ = "Multi-stage Dockerfile templates for common languages"
