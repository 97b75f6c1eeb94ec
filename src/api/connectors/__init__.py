"""Connectors — adapters de borda para requisições de provedores.

Estrutura:
- webhook/: verificação (hub.challenge), assinatura HMAC e parsing do corpo

Comum a todas as plataformas; regras por provedor ficam nos normalizers.
"""

__all__: list[str] = []
