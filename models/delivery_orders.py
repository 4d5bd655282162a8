from enum import Enum


class EstadoDeliveryOrder(str, Enum):
    draft = "draft"
    released = "released"
    invoiced = "invoiced"
    closed = "closed"
    cancelled = "cancelled"


#campos numéricos de cada línea que se totalizan en la cabecera
LINE_QUANTITY_FIELD = "quantity_to_deliver"
LINE_AMOUNT_FIELD = "total_amount"
