# app/services/__init__.py

"""
Service layer. Import directly from the specific modules to keep the
client/service import graph acyclic.
"""
