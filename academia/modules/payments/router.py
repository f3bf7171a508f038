# academia/modules/payments/router.py
import logging
from fastapi import APIRouter, Depends

from academia.core.errors import CheckoutError
from .schemas import PaymentIntentIn, PaymentIntentOut
from .service import CheckoutService, get_checkout_service

logger = logging.getLogger(__name__)

router = APIRouter()  # incluído com prefix "/payments" e também na raiz do app

@router.post("/create-payment-intent", response_model=PaymentIntentOut)
async def create_payment_intent(
    payload: PaymentIntentIn,
    service: CheckoutService = Depends(get_checkout_service),
):
    try:
        result = await service.create_payment_intent(
            payload.course_id, payload.user_id, payload.course_title
        )
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("[CHECKOUT] erro inesperado criando PaymentIntent")
        raise CheckoutError("Erro interno", status_code=500) from e

    return PaymentIntentOut(
        client_secret=result.client_secret,
        payment_intent_id=result.payment_intent_id,
        amount=result.amount,
        final_amount=result.final_amount,
        currency=result.currency,
    )
