"""
Entity: Actor

Quem executa uma operação: usuário autenticado (dono ou convidado com
grant) ou visitante anônimo identificado apenas pelo share token.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    actor_id: str | None
    email: str | None = None
    name: str | None = None
    is_guest: bool = False

    @classmethod
    def user(cls, actor_id: str, email: str | None = None, name: str | None = None) -> "Actor":
        return cls(actor_id=actor_id, email=email, name=name)

    @classmethod
    def guest(cls, email: str) -> "Actor":
        return cls(actor_id=None, email=email, is_guest=True)
