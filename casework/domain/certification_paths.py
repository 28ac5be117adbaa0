"""Required certification steps per document type.

Lookup table document type -> ordered tuple of certification kinds. The
status engine and the stage projector both consult it; new document types
are added here (or via settings) without touching transition logic.
"""

from collections.abc import Iterable, Mapping

from casework.domain.enums import CertificationKind

_APOSTILLE_THEN_TRANSLATION = (CertificationKind.APOSTILLE, CertificationKind.TRANSLATION)

DEFAULT_CERTIFICATION_PATHS: dict[str, tuple[CertificationKind, ...]] = {
    "birth_certificate": _APOSTILLE_THEN_TRANSLATION,
    "marriage_certificate": _APOSTILLE_THEN_TRANSLATION,
    "ancestor_birth_certificate": _APOSTILLE_THEN_TRANSLATION,
    "criminal_record": _APOSTILLE_THEN_TRANSLATION,
    "diploma": _APOSTILLE_THEN_TRANSLATION,
    "income_statement": (CertificationKind.TRANSLATION,),
    "passport": (),
    "proof_of_address": (),
    "photo": (),
}


class CertificationPathTable:
    """Resolves the ordered certification path for a document type.

    Unknown document types require no certification.
    """

    def __init__(
        self,
        paths: Mapping[str, Iterable[CertificationKind | str]] | None = None,
        *,
        include_defaults: bool = True,
    ) -> None:
        merged: dict[str, tuple[CertificationKind, ...]] = (
            dict(DEFAULT_CERTIFICATION_PATHS) if include_defaults else {}
        )
        for document_type, kinds in (paths or {}).items():
            path = tuple(CertificationKind(k) for k in kinds)
            if len(set(path)) != len(path):
                raise ValueError(
                    f"Certification path for {document_type!r} repeats a kind: {path}"
                )
            merged[document_type] = path
        self._paths = merged

    def path_for(self, document_type: str) -> tuple[CertificationKind, ...]:
        return self._paths.get(document_type, ())

    def requires(self, document_type: str, kind: CertificationKind) -> bool:
        return kind in self.path_for(document_type)

    def predecessors(
        self, document_type: str, kind: CertificationKind
    ) -> tuple[CertificationKind, ...]:
        """Kinds that must be certified before `kind` may start.

        For a kind in the path: the kinds before it. For an ad hoc kind not in
        the path: the whole path.
        """
        path = self.path_for(document_type)
        if kind in path:
            return path[: path.index(kind)]
        return path

    def document_types(self) -> list[str]:
        return sorted(self._paths)
