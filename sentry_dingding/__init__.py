"""Pacote do proxy de webhooks Sentry -> DingDing.

Este pacote contém:
- constants: variáveis de ambiente e textos fixos
- utils: helpers tolerantes a campos ausentes
- detection: detecção do formato do payload (event/action)
- enrichment: extração dos campos de cada formato
- formatters: blocos e renderização do markdown
- services: envio para o robô do DingDing
- controller: criação do Flask app e endpoints
"""
