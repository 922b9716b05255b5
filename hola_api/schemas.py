from __future__ import annotations

from pydantic import BaseModel


class Saludo(BaseModel):
    mensaje: str = "Hola desde el API"
    timestamp: str
    status: str = "success"


class SaludoUsuario(BaseModel):
    mensaje: str
    usuario: str
    timestamp: str


class RutaNoEncontrada(BaseModel):
    error: str = "Ruta no encontrada"
    mensaje: str = "La ruta que buscas no existe"
