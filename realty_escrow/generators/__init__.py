"""Faker-backed generators for signers and property metadata."""

from realty_escrow.generators.base import BaseGenerator
from realty_escrow.generators.metadata import MetadataGenerator
from realty_escrow.generators.signer import SignerGenerator

__all__ = ["BaseGenerator", "MetadataGenerator", "SignerGenerator"]
