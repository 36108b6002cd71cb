"""MU/TH/UR 6000 chat terminal core.

The core routes one line of crew input at a time:

    input → CommandRouter.classify → Route.handler → Outcome
          → ChatSession applies the outcome → ResponseRenderer reveals the reply

Reference queries (/wiki, /planets, …) are answered from the in-memory
ReferenceStore; everything else is forwarded to the configured AI provider
through the ProviderGateway.
"""
