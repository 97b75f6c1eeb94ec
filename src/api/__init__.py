"""API — camada de borda e adapters de plataformas.

Responsabilidades:
- Receber webhooks de provedores externos
- Validar assinaturas e corpo JSON
- Normalizar payloads para eventos canônicos

Subpastas:
- connectors/: verificação, assinatura e parsing de webhooks
- normalizers/: conversão de payloads externos → eventos canônicos
- routes/: endpoints HTTP (webhooks, health)

NÃO PODE conter: regras de persistência ou orquestração de use cases.
"""
