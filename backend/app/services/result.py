"""
Résultat étiqueté du moteur de validation de l'emploi du temps.

Chaque étape renvoie Ok(valeur) ou Err(catégorie, code, message) au lieu de
lever une exception : le pipeline enchaîne les étapes par retour anticipé.
"""

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorCategory(str, enum.Enum):
    """Famille d'erreur, chacune associée à un code HTTP distinct."""
    INPUT = "input"        # champ manquant ou mal formé
    LOOKUP = "lookup"      # référence introuvable ou échec d'accès à la BDD
    RULE = "rule"          # forme valide mais règle métier violée
    CONFLICT = "conflict"  # collision de ressource ou indisponibilité

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorCategory.INPUT: 400,
    ErrorCategory.LOOKUP: 400,
    ErrorCategory.RULE: 422,
    ErrorCategory.CONFLICT: 409,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    is_err = False


@dataclass(frozen=True)
class Err:
    """
    Erreur prête à être affichée : `message` est une phrase destinée à
    l'utilisateur final, `code` un identifiant stable pour les clients.
    """
    category: ErrorCategory
    code: str
    message: str

    is_err = True

    @property
    def status_code(self) -> int:
        return self.category.status_code

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code, "category": self.category.value}


Result = Union[Ok[T], Err]
