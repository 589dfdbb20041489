"""Interfaces/abstracciones del Core.

Por qué:
- Define el contrato (Protocol) del dispatcher que usan las rutas.
- Las rutas dependen de la abstracción y no de `StripeClient`.
"""
