"""Relay de relatórios de erro (webhook) -> Slack.

Este pacote contém:
- constants: variáveis de ambiente e valores fixos
- config: configuração imutável e parsing do mapa projeto -> canal
- errors: hierarquia de erros (decode, configuração, transporte, rejeição)
- models: payload do webhook de entrada
- routing: resolução do canal por projeto
- formatters: mensagem do Slack (attachment ou Block Kit)
- services: cliente do Slack e dispatcher
- controller: criação do Flask app e endpoints
"""
