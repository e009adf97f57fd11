"""cmdtree - declarative command trees compiled for a host dispatcher.

Independent call sites register commands on a shared `RootRegistry`
(`cmdtree.registry`); a single `register_all` pass compiles every root
(`cmdtree.node`) and hands it to the host dispatcher.
"""
