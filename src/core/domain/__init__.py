"""Objetos de la API y tipos del dominio.

Por qué:
- Aquí viven los modelos estrictos (Pydantic v2) que decodifican el cable.
- El dominio no conoce HTTP ni CLI: solo la forma de los objetos.
"""
