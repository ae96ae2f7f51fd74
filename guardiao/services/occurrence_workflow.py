# guardiao/services/occurrence_workflow.py
"""
Occurrence dispatch workflow.

Occurrences climb the chain of command N1 (duty officer triage) → N2
(counter-intelligence) → N3 (OSD homologation) → OM (commander review) and
end archived. attempt_transition() is the only place that decides whether a
status change is allowed; callers persist the returned draft.

Rules:
  REGISTERED/RETURNED → TRIAGE                 N1
  TRIAGE → ESCALATED | RETURNED                N1
  ESCALATED → RESOLVED (sector required)       N2
  ESCALATED → TRIAGE                           N2
  RESOLVED → CLOSED (comment required)         N3
  RESOLVED → ESCALATED | COMMAND_REVIEW        N3
  any open → TRIAGE/ESCALATED/RESOLVED/
             COMMAND_REVIEW, or any rule above OM
  any open → CLOSED (comment required)         OM, or N2 admin
  any open except PENDING → PENDING            any admin
  CLOSED is terminal.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from guardiao.constants import AccessLevel
from guardiao.services.actor import Actor


class Status(str, Enum):
    REGISTERED = "Registrada (Aguardando N1)"
    PENDING = "Pendente"
    TRIAGE = "N1: Adjunto / Oficial de Dia"
    ESCALATED = "N2: Contrainteligência / Seg. Orgânica"
    RESOLVED = "N3: Homologação OSD"
    COMMAND_REVIEW = "OM: Revisão do Comandante"
    CLOSED = "Arquivado / Finalizado"
    RETURNED = "Retornado para Ajuste"


class TransitionRejected(Exception):
    """Raised when a status change is not permitted for this actor/state."""

    CLOSED = "closed"
    NOT_ADMIN = "not_admin"
    SAME_STATUS = "same_status"
    COMMENT_REQUIRED = "comment_required"
    SECTOR_REQUIRED = "sector_required"
    NOT_PERMITTED = "not_permitted"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


@dataclass
class TimelineDraft:
    status: Status
    comment: str


LEVEL_TRANSITIONS: dict[tuple[AccessLevel, Status, Status], str] = {
    (AccessLevel.N1, Status.REGISTERED, Status.TRIAGE): "Assumido para triagem pelo N1.",
    (AccessLevel.N1, Status.RETURNED, Status.TRIAGE): "Assumido para triagem pelo N1.",
    (AccessLevel.N1, Status.TRIAGE, Status.ESCALATED): "Triagem N1 concluída. Segue para N2.",
    (AccessLevel.N1, Status.TRIAGE, Status.RETURNED): "Solicitado ajuste de informações pelo N1.",
    (AccessLevel.N2, Status.ESCALATED, Status.RESOLVED): "Parecer de inteligência N2 concluído. Setor responsável: {sector}.",
    (AccessLevel.N2, Status.ESCALATED, Status.TRIAGE): "Retornado ao N1 para complementação.",
    (AccessLevel.N3, Status.RESOLVED, Status.CLOSED): "",
    (AccessLevel.N3, Status.RESOLVED, Status.ESCALATED): "Necessário nova análise técnica N2.",
    (AccessLevel.N3, Status.RESOLVED, Status.COMMAND_REVIEW): "Homologação do OSD concluída.",
}

COMMAND_DIRECT: dict[Status, str] = {
    Status.TRIAGE: "Escalonamento Direto via Comando OM p/ N1.",
    Status.ESCALATED: "Escalonamento Direto via Comando OM p/ N2.",
    Status.RESOLVED: "Escalonamento Direto via Comando OM p/ N3.",
    Status.COMMAND_REVIEW: "Avocado pelo Comando OM para Revisão Final.",
}

PENDING_COMMENT = "Marcada como pendente."


def _level_rule(actor: Actor, current: Status, target: Status) -> Optional[str]:
    """Default comment of the matching rule, or None when no rule covers the move."""
    if actor.is_command:
        for (_, src, dst), comment in LEVEL_TRANSITIONS.items():
            if src == current and dst == target:
                return comment
        return None
    return LEVEL_TRANSITIONS.get((actor.access_level, current, target))


def attempt_transition(current: Status, actor: Actor, target: Status,
                       comment: Optional[str] = None, sector: Optional[str] = None) -> TimelineDraft:
    """
    Decide whether `actor` may move an occurrence from `current` to `target`.
    Returns the timeline draft (with a default comment filled in when none
    was given) or raises TransitionRejected.
    """
    current, target = Status(current), Status(target)
    comment = (comment or "").strip()

    if current == Status.CLOSED:
        raise TransitionRejected(TransitionRejected.CLOSED, "Ocorrência arquivada não admite novas tramitações.")
    if not actor.is_admin:
        raise TransitionRejected(TransitionRejected.NOT_ADMIN, "Apenas gestores podem tramitar ocorrências.")
    if target == current:
        raise TransitionRejected(TransitionRejected.SAME_STATUS, "A ocorrência já se encontra neste status.")

    if target == Status.CLOSED:
        allowed = (
            actor.is_command
            or actor.access_level == AccessLevel.N2
            or (actor.access_level == AccessLevel.N3 and current == Status.RESOLVED)
        )
        if not allowed:
            raise TransitionRejected(TransitionRejected.NOT_PERMITTED,
                                     "Este registro está sob gestão de outro patamar hierárquico.")
        if not comment:
            raise TransitionRejected(TransitionRejected.COMMENT_REQUIRED,
                                     "Descreva a tratativa realizada antes de finalizar.")
        return TimelineDraft(status=target, comment=comment)

    if target == Status.PENDING:
        return TimelineDraft(status=target, comment=comment or PENDING_COMMENT)

    if actor.is_command and target in COMMAND_DIRECT:
        return TimelineDraft(status=target, comment=comment or COMMAND_DIRECT[target])

    default = _level_rule(actor, current, target)
    if default is None:
        raise TransitionRejected(TransitionRejected.NOT_PERMITTED,
                                 "Este registro está sob gestão de outro patamar hierárquico.")

    if current == Status.ESCALATED and target == Status.RESOLVED and not (sector or "").strip():
        raise TransitionRejected(TransitionRejected.SECTOR_REQUIRED,
                                 "Defina o setor responsável antes de encaminhar ao N3.")

    return TimelineDraft(status=target, comment=comment or default.format(sector=sector))
