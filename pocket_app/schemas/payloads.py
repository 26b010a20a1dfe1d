from pydantic import BaseModel, ConfigDict, StrictStr


class SaveURLRequest(BaseModel):
    """Body of POST /puturl. Empty strings are accepted as-is."""
    tag: StrictStr
    url: StrictStr

    model_config = ConfigDict(extra="ignore")


class NotifyRequest(BaseModel):
    """Body of POST /notify. Emptiness is checked by the route."""
    level: StrictStr
    body: StrictStr

    model_config = ConfigDict(extra="ignore")
