"""Tests unitaires pour le module otpauth.

Couvre parse_uri, build_uri, CredentialDraft et Credential.
"""

import pytest

from otp_vault.errors.exceptions import ValidationError
from otp_vault.otpauth import (
    DEFAULT_ISSUER,
    DEFAULT_NAME,
    Credential,
    CredentialDraft,
    HashAlgorithm,
    MalformedUriError,
    MissingSecretError,
    OtpType,
    ParseError,
    UnsupportedSchemeError,
    build_uri,
    parse_uri,
)

ACME_URI = (
    "otpauth://totp/ACME:alice@example.com"
    "?secret=JBSWY3DPEHPK3PXP&issuer=ACME"
)


# ---------------------------------------------------------------------------
# Tests parse_uri
# ---------------------------------------------------------------------------

class TestParseUri:
    """Tests du parseur d'URI otpauth."""

    def test_uri_complete(self) -> None:
        """Extrait nom, émetteur, secret et type d'une URI standard."""
        draft = parse_uri(ACME_URI)
        assert draft.name == "alice@example.com"
        assert draft.issuer == "ACME"
        assert draft.secret == "JBSWY3DPEHPK3PXP"
        assert draft.type == OtpType.TOTP

    def test_valeurs_par_defaut_du_brouillon(self) -> None:
        """Algorithme, chiffres et période prennent les défauts."""
        draft = parse_uri(ACME_URI)
        assert draft.algorithm == HashAlgorithm.SHA1
        assert draft.digits == 6
        assert draft.period == 30

    def test_parametres_algorithme_ignores(self) -> None:
        """algorithm, digits et period de l'URI ne sont pas lus."""
        draft = parse_uri(
            "otpauth://totp/ACME:bob?secret=JBSWY3DPEHPK3PXP"
            "&issuer=ACME&algorithm=SHA512&digits=8&period=60"
        )
        assert draft.algorithm == HashAlgorithm.SHA1
        assert draft.digits == 6
        assert draft.period == 30

    def test_label_sans_deux_points(self) -> None:
        """Sans deux-points, le libellé entier devient le nom."""
        draft = parse_uri(
            "otpauth://totp/alice@example.com?secret=JBSWY3DPEHPK3PXP"
        )
        assert draft.name == "alice@example.com"

    def test_label_encode(self) -> None:
        """Le libellé est décodé et l'espace après ':' supprimé."""
        draft = parse_uri(
            "otpauth://totp/Example%20Co%3A%20alice%40example.com"
            "?secret=JBSWY3DPEHPK3PXP&issuer=Example%20Co"
        )
        assert draft.name == "alice@example.com"
        assert draft.issuer == "Example Co"

    def test_prefixe_du_label_informatif(self) -> None:
        """Le préfixe du libellé n'alimente pas l'émetteur."""
        draft = parse_uri(
            "otpauth://totp/Other:alice?secret=JBSWY3DPEHPK3PXP"
            "&issuer=ACME"
        )
        assert draft.issuer == "ACME"
        assert draft.name == "alice"

    def test_emetteur_absent(self) -> None:
        """Un émetteur absent devient 'Unknown'."""
        draft = parse_uri("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP")
        assert draft.issuer == DEFAULT_ISSUER

    def test_emetteur_vide(self) -> None:
        """Un émetteur vide devient 'Unknown'."""
        draft = parse_uri(
            "otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP&issuer="
        )
        assert draft.issuer == DEFAULT_ISSUER

    def test_nom_vide(self) -> None:
        """Un libellé vide donne le nom 'Account'."""
        draft = parse_uri("otpauth://totp/?secret=JBSWY3DPEHPK3PXP")
        assert draft.name == DEFAULT_NAME

    def test_nom_vide_apres_deux_points(self) -> None:
        """'ACME:' sans compte donne le nom 'Account'."""
        draft = parse_uri("otpauth://totp/ACME:?secret=JBSWY3DPEHPK3PXP")
        assert draft.name == DEFAULT_NAME

    def test_secret_non_valide_au_parsing(self) -> None:
        """Un secret non base32 est accepté par le parseur."""
        draft = parse_uri("otpauth://totp/alice?secret=not-base32!")
        assert draft.secret == "not-base32!"

    def test_secret_absent(self) -> None:
        """Un secret absent lève MissingSecretError."""
        with pytest.raises(MissingSecretError):
            parse_uri("otpauth://totp/ACME:alice?issuer=ACME")

    def test_secret_vide(self) -> None:
        """Un secret vide lève MissingSecretError."""
        with pytest.raises(MissingSecretError):
            parse_uri("otpauth://totp/ACME:alice?secret=&issuer=ACME")

    @pytest.mark.parametrize(
        "uri",
        [
            "https://example.com/?secret=JBSWY3DPEHPK3PXP",
            "OTPAUTH://totp/alice?secret=JBSWY3DPEHPK3PXP",
            "hello world",
            "",
        ],
    )
    def test_schema_non_supporte(self, uri: str) -> None:
        """Un texte sans préfixe otpauth:// lève UnsupportedSchemeError."""
        with pytest.raises(UnsupportedSchemeError):
            parse_uri(uri)

    def test_type_hotp_refuse(self) -> None:
        """Le mode hotp est reconnu mais refusé."""
        with pytest.raises(MalformedUriError, match="hotp"):
            parse_uri(
                "otpauth://hotp/alice?secret=JBSWY3DPEHPK3PXP&counter=0"
            )

    def test_type_inconnu(self) -> None:
        """Un type OTP inconnu lève MalformedUriError."""
        with pytest.raises(MalformedUriError):
            parse_uri("otpauth://motp/alice?secret=JBSWY3DPEHPK3PXP")

    def test_type_absent(self) -> None:
        """Une URI sans type lève MalformedUriError."""
        with pytest.raises(MalformedUriError):
            parse_uri("otpauth:///alice?secret=JBSWY3DPEHPK3PXP")

    def test_hierarchie_des_exceptions(self) -> None:
        """Les erreurs de parsing sont des ValidationError."""
        assert issubclass(UnsupportedSchemeError, ParseError)
        assert issubclass(MissingSecretError, ParseError)
        assert issubclass(MalformedUriError, ParseError)
        assert issubclass(ParseError, ValidationError)


# ---------------------------------------------------------------------------
# Tests build_uri
# ---------------------------------------------------------------------------

class TestBuildUri:
    """Tests de l'export en URI otpauth."""

    def test_format_genere(self) -> None:
        """Le libellé 'issuer:name' est encodé, l'arobase conservé."""
        draft = CredentialDraft(
            name="alice@example.com",
            issuer="Example Co",
            secret="JBSWY3DPEHPK3PXP",
        )
        uri = build_uri(draft)
        assert uri.startswith(
            "otpauth://totp/Example%20Co%3Aalice@example.com?"
        )
        assert "secret=JBSWY3DPEHPK3PXP" in uri
        assert "issuer=Example%20Co" in uri
        assert "digits=6" in uri
        assert "period=30" in uri

    def test_reimport_du_resultat(self) -> None:
        """parse_uri accepte la sortie de build_uri."""
        draft = parse_uri(ACME_URI)
        assert parse_uri(build_uri(draft)) == draft


# ---------------------------------------------------------------------------
# Tests CredentialDraft et Credential
# ---------------------------------------------------------------------------

class TestCredential:
    """Tests des dataclasses de comptes."""

    def test_secret_vide_leve_erreur(self) -> None:
        """Un secret vide lève ValueError."""
        with pytest.raises(ValueError, match="secret"):
            CredentialDraft(name="alice", issuer="ACME", secret="  ")

    def test_id_vide_leve_erreur(self) -> None:
        """Un identifiant vide lève ValueError."""
        with pytest.raises(ValueError, match="id"):
            Credential(id="", name="a", issuer="b", secret="JBSWY3DP")

    def test_with_id(self) -> None:
        """with_id conserve tous les champs du brouillon."""
        draft = parse_uri(ACME_URI)
        credential = draft.with_id("abc")
        assert credential.id == "abc"
        assert credential.draft == draft

    def test_immuabilite(self) -> None:
        """La dataclass est immuable (frozen)."""
        credential = parse_uri(ACME_URI).with_id("abc")
        with pytest.raises(Exception):
            credential.secret = "AAAA"  # type: ignore[misc]

    def test_to_dict(self) -> None:
        """to_dict produit des valeurs JSON natives."""
        data = parse_uri(ACME_URI).with_id("abc").to_dict()
        assert data == {
            "id": "abc",
            "name": "alice@example.com",
            "issuer": "ACME",
            "secret": "JBSWY3DPEHPK3PXP",
            "type": "totp",
            "algorithm": "SHA1",
            "digits": 6,
            "period": 30,
        }

    def test_from_dict_champs_optionnels(self) -> None:
        """Les champs absents prennent leur valeur par défaut."""
        credential = Credential.from_dict(
            {
                "id": "abc",
                "name": "alice",
                "issuer": "ACME",
                "secret": "JBSWY3DPEHPK3PXP",
                "type": "totp",
                "extra": "ignore",
            }
        )
        assert credential.algorithm == HashAlgorithm.SHA1
        assert credential.digits == 6
        assert credential.period == 30

    def test_from_dict_algorithme_minuscule(self) -> None:
        """L'algorithme est accepté en minuscules."""
        credential = Credential.from_dict(
            {
                "id": "abc",
                "name": "alice",
                "issuer": "ACME",
                "secret": "JBSWY3DPEHPK3PXP",
                "algorithm": "sha256",
            }
        )
        assert credential.algorithm == HashAlgorithm.SHA256

    def test_from_dict_objet_attendu(self) -> None:
        """Une valeur qui n'est pas un dict lève ValueError."""
        with pytest.raises(ValueError, match="objet"):
            Credential.from_dict(["abc"])  # type: ignore[arg-type]

    def test_from_dict_champ_texte_non_chaine(self) -> None:
        """Un identifiant numérique lève ValueError."""
        with pytest.raises(ValueError, match="'id'"):
            Credential.from_dict(
                {"id": 5, "name": "a", "issuer": "b", "secret": "JBSW"}
            )

    def test_from_dict_champ_obligatoire_absent(self) -> None:
        """Un champ obligatoire absent lève KeyError."""
        with pytest.raises(KeyError):
            Credential.from_dict({"id": "abc", "name": "alice"})
