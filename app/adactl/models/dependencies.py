"""Dependency version model.

The dependency helper script resolves, for a given cardano-node release,
the versions of the libraries and toolchain the build playbook needs and
writes them to a JSON file keyed by upstream project name.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class DependencyVersions(BaseModel):
    """Versions of the build dependencies for one cardano-node release.

    Attributes:
        cardano_node: cardano-node release tag.
        iohk_nix: iohk-nix commit hash pinned by the node's flake.lock.
        libsodium: libsodium commit hash pinned by iohk-nix.
        secp256k1: secp256k1 tag pinned by iohk-nix.
        blst: blst ref pinned by iohk-nix.
        ghc: GHC version from the release notes.
        cabal: Cabal version from the release notes.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cardano_node: Annotated[str, Field(alias="cardano-node")]
    iohk_nix: Annotated[str, Field(alias="iohk-nix")]
    libsodium: str
    secp256k1: str
    blst: str
    ghc: str
    cabal: str

    @field_validator("*")
    @classmethod
    def require_value(cls, v: str, info: ValidationInfo) -> str:
        """Reject empty values and the literal "null" jq emits for missing keys."""
        value = v.strip()
        if not value or value == "null":
            msg = f"{info.field_name}: version could not be resolved"
            raise ValueError(msg)
        return value

    def to_parameters(self) -> dict[str, str]:
        """Map the versions to the parameter-file keys the playbooks read."""
        return {
            "cardano_node_version": self.cardano_node,
            "iohk_nix_version": self.iohk_nix,
            "libsodium_version": self.libsodium,
            "secp256k1_version": self.secp256k1,
            "blst_version": self.blst,
            "ghc_version": self.ghc,
            "cabal_version": self.cabal,
        }
