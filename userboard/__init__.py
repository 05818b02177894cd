# userboard/__init__.py
"""
userboard: registro de usuarios + portada con los últimos registrados.

    uvicorn userboard.main:app      (o python run_dev.py)
"""

__version__ = "0.1.0"
