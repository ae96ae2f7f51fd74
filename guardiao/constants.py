# guardiao/constants.py
"""Fixed vocabularies shared by models, services and schemas."""

from enum import Enum


class GuardGate(str, Enum):
    G1 = "PORTÃO G1"
    G2 = "PORTÃO G2"
    G3 = "PORTÃO G3"


class Characteristic(str, Enum):
    MILITAR = "MILITAR"
    CIVIL = "CIVIL"
    PRESTADOR = "PRESTADOR"
    ENTREGADOR = "ENTREGADOR"


class AccessMode(str, Enum):
    PEDESTRIAN = "Pedestre"
    VEHICLE = "Veículo"


class AccessCategory(str, Enum):
    ENTRY = "Entrada"
    EXIT = "Saída"


class Urgency(str, Enum):
    LOW = "Baixa"
    MEDIUM = "Média"
    HIGH = "Alta"
    CRITICAL = "Crítica"


class AccessLevel(str, Enum):
    N1 = "N1"   # Adjunto / Oficial de Dia
    N2 = "N2"   # Contrainteligência / Seg. Orgânica
    N3 = "N3"   # Homologação OSD
    OM = "OM"   # Comandante


class SuggestionStatus(str, Enum):
    PENDING = "Pendente"
    IN_REVIEW = "Em análise"
    ANSWERED = "Respondida"
    ARCHIVED = "Arquivada"


class ParkingStatus(str, Enum):
    PENDING = "Pendente"
    APPROVED = "Aprovado"
    DENIED = "Negado"


class MissionStatus(str, Enum):
    REQUESTED = "Solicitada"
    APPROVED = "Aprovada"
    IN_PROGRESS = "Em andamento"
    DONE = "Concluída"
    CANCELLED = "Cancelada"


DESTINATIONS = [
    "BASP (Comando)", "GSD-SP", "PASP", "PCAN", "HOTEL DE TRÂNSITO BASP",
    "VILA GRAD.", "SAP", "SOP", "ALMOXARIFADO", "RANCHO", "BARBEARIA",
    "CINEMA", "ANFITEATRO", "PISTA DE ATLETISMO", "QUADRA ESPORTIVA",
]

SECTORS = [
    "BASP", "SOP", "SAP", "EPA-SEÇÃO", "EPA-TROPA", "CANIL", "EFSD", "ESI-SEÇÃO", "ESI-TROPA",
]

OCCURRENCE_CATEGORIES = {
    "Ocorrências de Emergência": ["Incêndio em edificação", "Princípio de incêndio", "Vazamento de gás", "Explosão", "Acionamento de alarme"],
    "Controle de Acesso e Credenciamento": ["Tentativa de acesso indevido", "Uso de credencial de terceiro", "Veículo não credenciado"],
    "Segurança Orgânica / Patrimonial": ["Arrombamento", "Tentativa de invasão", "Furto", "Vandalismo", "Dano ao patrimônio"],
    "Segurança Operacional": ["Disparo indevido", "Falha em procedimento", "Posto abandonado"],
    "Segurança de Sistemas e Tecnologia": ["Falha sistema acesso", "Indisponibilidade CFTV", "Câmera inoperante"],
    "Veículos e Tráfego Interno": ["Acidente interno", "Excesso velocidade", "Estacionamento proibido"],
    "Pessoas e Conduta": ["Aglomeração restrita", "Comportamento suspeito", "Conflito usuários"],
    "Materiais e Logística": ["Entrada sem registro", "Saída sem autorização", "Item proibido"],
}
