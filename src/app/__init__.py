"""App — núcleo do serviço: casos de uso, serviços e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: roteamento de webhooks (sem IO direto)
- services/: resolução de tenant, persistência canônica, IntegrationLog
- infra/: implementações concretas de stores (memória, Firestore)
- protocols/: contratos de stores, normalizers e eventos canônicos
- domain/: modelos e tabelas de status
- observability/: contexto de requisição e métricas

Padrão: api adapta; app executa; config configura; utils apoia.
"""
