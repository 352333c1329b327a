from pydantic import BaseModel, Field, StrictInt

from price_registry.config import MAX_PRICE


class PriceIn(BaseModel):
    # strict: "355", 355.0 and true are all rejected
    price: StrictInt = Field(..., ge=0, le=MAX_PRICE)
