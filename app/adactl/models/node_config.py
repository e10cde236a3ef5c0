"""Stored node configuration model.

The stored configuration is the small JSON document adactl writes after a
successful install so that later status checks know which port the node
was configured for.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class NodeConfig(BaseModel):
    """Configuration persisted after a successful install.

    Attributes:
        cardano_port: Port the node was installed to listen on.
        last_installation: Timestamp of the last successful install.
    """

    model_config = ConfigDict(extra="ignore")

    cardano_port: Annotated[int, Field(ge=1, le=65535, description="Node listening port")]
    last_installation: Annotated[
        datetime | None,
        Field(description="Timestamp of the last successful install"),
    ] = None
