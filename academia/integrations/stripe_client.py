# academia/integrations/stripe_client.py
from __future__ import annotations
import logging
from typing import Optional, Dict, Any
import httpx

from academia.core.config import settings

logger = logging.getLogger(__name__)


def _form_metadata(metadata: Dict[str, Any]) -> Dict[str, str]:
    # API do Stripe é form-encoded: metadata[chave]=valor
    return {f"metadata[{k}]": str(v) for k, v in metadata.items() if v not in (None, "")}


class StripeClient:
    def __init__(self, secret_key: str | None, base_url: str | None = None, timeout: float = 20.0,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.secret_key = secret_key
        self.base_url = (base_url or settings.STRIPE_API_BASE).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "accept": "application/json",
            "authorization": f"Bearer {self.secret_key}",
        }

    async def create_payment_intent(self, *, amount: int, currency: str,
                                    metadata: Optional[Dict[str, Any]] = None,
                                    description: Optional[str] = None) -> Dict[str, Any]:
        if not self.secret_key:
            raise StripeError("not_configured", {"error": {"message": "Processador de pagamentos não configurado"}})

        payload: Dict[str, str] = {
            "amount": str(amount),
            "currency": currency.lower(),
            "automatic_payment_methods[enabled]": "true",
        }
        if description:
            payload["description"] = description
        if metadata:
            payload |= _form_metadata(metadata)

        # sem retry: repetir o POST pode criar um segundo PaymentIntent
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.post(f"{self.base_url}/payment_intents", data=payload, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error("[STRIPE][PAYMENT_INTENT] falha de rede: %s", e)
            raise StripeError("network_error", {"error": {"message": str(e)}}) from e

        if r.status_code >= 400:
            try:
                data = r.json()
            except ValueError:
                data = {"error": {"message": r.text}}
            if not isinstance(data, dict):
                data = {"error": {"message": str(data)}}
            data["_status_code"] = r.status_code
            logger.error("[STRIPE][PAYMENT_INTENT][ERROR] %s", data)
            raise StripeError("create_payment_intent_failed", data)
        return r.json()


class StripeError(RuntimeError):
    def __init__(self, code: str, data: Any):
        super().__init__(code)
        self.code = code
        self.data = data

    @property
    def message(self) -> str | None:
        err = (self.data or {}).get("error") if isinstance(self.data, dict) else None
        if isinstance(err, dict):
            return err.get("message")
        return None
