"""TLS certificate inspection."""

from __future__ import annotations

import socket
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, ed448, rsa
from cryptography.x509.oid import SignatureAlgorithmOID

from webrecon.results import Results
from webrecon.target import Target

DEFAULT_TIMEOUT = 10.0
DEFAULT_PORT = 443
_EXPIRY_WARNING_DAYS = 30

_RSA_SIGNATURES = {
    SignatureAlgorithmOID.RSA_WITH_MD5,
    SignatureAlgorithmOID.RSA_WITH_SHA1,
    SignatureAlgorithmOID.RSA_WITH_SHA224,
    SignatureAlgorithmOID.RSA_WITH_SHA256,
    SignatureAlgorithmOID.RSA_WITH_SHA384,
    SignatureAlgorithmOID.RSA_WITH_SHA512,
}
_ECDSA_SIGNATURES = {
    SignatureAlgorithmOID.ECDSA_WITH_SHA1,
    SignatureAlgorithmOID.ECDSA_WITH_SHA224,
    SignatureAlgorithmOID.ECDSA_WITH_SHA256,
    SignatureAlgorithmOID.ECDSA_WITH_SHA384,
    SignatureAlgorithmOID.ECDSA_WITH_SHA512,
}
_DSA_SIGNATURES = {
    SignatureAlgorithmOID.DSA_WITH_SHA1,
    SignatureAlgorithmOID.DSA_WITH_SHA224,
    SignatureAlgorithmOID.DSA_WITH_SHA256,
}


class SSLScanError(RuntimeError):
    """Raised when the certificate cannot be retrieved."""


@dataclass
class SSLInfo:
    """Details of a server certificate."""

    domain: str
    subject: str
    issuer: str
    valid_from: datetime
    valid_until: datetime
    is_valid: bool
    version: int
    serial_number: str
    sans: list[str] = field(default_factory=list)
    signature_algorithm: str = ""
    public_key_algorithm: str = ""
    key_size: int = 0
    is_self_signed: bool = False


def _utc(cert: x509.Certificate, name: str) -> datetime:
    value = getattr(cert, f"{name}_utc", None)
    if value is None:
        value = getattr(cert, name).replace(tzinfo=timezone.utc)
    return value


def _signature_algorithm(cert: x509.Certificate) -> str:
    oid = cert.signature_algorithm_oid
    if oid == SignatureAlgorithmOID.ED25519:
        return "Ed25519"
    if oid == SignatureAlgorithmOID.ED448:
        return "Ed448"
    try:
        algorithm = cert.signature_hash_algorithm
    except UnsupportedAlgorithm:
        algorithm = None
    if algorithm is None:
        return oid.dotted_string
    digest = algorithm.name.upper()
    if oid in _ECDSA_SIGNATURES:
        return f"ECDSA-{digest}"
    if oid in _DSA_SIGNATURES:
        return f"DSA-{digest}"
    if oid == SignatureAlgorithmOID.RSASSA_PSS:
        return f"{digest}-RSAPSS"
    if oid in _RSA_SIGNATURES:
        return f"{digest}-RSA"
    return oid.dotted_string


def _public_key(cert: x509.Certificate) -> tuple[str, int]:
    try:
        key = cert.public_key()
    except (ValueError, UnsupportedAlgorithm):
        return "Unknown", 0
    if isinstance(key, rsa.RSAPublicKey):
        return "RSA", key.key_size
    if isinstance(key, ec.EllipticCurvePublicKey):
        return "ECDSA", key.curve.key_size
    if isinstance(key, dsa.DSAPublicKey):
        return "DSA", key.key_size
    if isinstance(key, ed25519.Ed25519PublicKey):
        return "Ed25519", 256
    if isinstance(key, ed448.Ed448PublicKey):
        return "Ed448", 456
    return "Unknown", 0


def _dns_names(cert: x509.Certificate) -> list[str]:
    try:
        extension = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []
    return list(extension.value.get_values_for_type(x509.DNSName))


def certificate_info(der_bytes: bytes, domain: str) -> SSLInfo:
    """Describe a DER-encoded certificate served for the domain."""
    cert = x509.load_der_x509_certificate(der_bytes)
    valid_from = _utc(cert, "not_valid_before")
    valid_until = _utc(cert, "not_valid_after")
    now = datetime.now(timezone.utc)
    subject = cert.subject.rfc4514_string()
    issuer = cert.issuer.rfc4514_string()
    key_algorithm, key_size = _public_key(cert)

    return SSLInfo(
        domain=domain,
        subject=subject,
        issuer=issuer,
        valid_from=valid_from,
        valid_until=valid_until,
        is_valid=valid_from < now < valid_until,
        version=cert.version.value + 1,
        serial_number=str(cert.serial_number),
        sans=_dns_names(cert),
        signature_algorithm=_signature_algorithm(cert),
        public_key_algorithm=key_algorithm,
        key_size=key_size,
        is_self_signed=issuer == subject,
    )


class SSLScanner:
    """Fetches and evaluates the certificate the target presents."""

    def __init__(
        self,
        target: Target,
        results: Results,
        timeout: float = DEFAULT_TIMEOUT,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.target = target
        self.results = results
        self.timeout = timeout
        self.port = port

    def _fetch_certificate(self) -> bytes:
        domain = self.target.domain
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        try:
            with socket.create_connection((domain, self.port), timeout=self.timeout) as sock:
                with context.wrap_socket(sock, server_hostname=domain) as tls:
                    der = tls.getpeercert(binary_form=True)
        except (OSError, UnicodeError) as exc:
            raise SSLScanError(f"failed to connect to {domain}:{self.port}: {exc}") from exc
        if not der:
            raise SSLScanError("no certificates found")
        return der

    def scan(self) -> SSLInfo:
        """Retrieve the certificate, record it and any problems with it."""
        domain = self.target.domain
        print(f"Analyzing SSL/TLS certificate for {domain}...")

        der = self._fetch_certificate()
        try:
            info = certificate_info(der, domain)
        except ValueError as exc:
            raise SSLScanError(f"could not parse certificate: {exc}") from exc

        self.results.add(
            "ssl", "info", "SSL/TLS Certificate", f"SSL/TLS certificate for {domain}", info
        )
        if not info.is_valid:
            self.results.add(
                "ssl",
                "high",
                "Invalid SSL Certificate",
                f"The SSL certificate for {domain} is not valid",
                info,
            )
        if info.is_self_signed:
            self.results.add(
                "ssl",
                "medium",
                "Self-Signed Certificate",
                f"The SSL certificate for {domain} is self-signed",
                info,
            )

        remaining = info.valid_until - datetime.now(timezone.utc)
        days_left = int(remaining.total_seconds() / 86400)
        if days_left < _EXPIRY_WARNING_DAYS:
            self.results.add(
                "ssl",
                "medium",
                "Certificate Expiring Soon",
                f"The SSL certificate for {domain} will expire in {days_left} days",
                info,
            )

        return info