# Word Siege Source Package
"""
Word Siege - Typing-combat stage engine.

Modules:
- core: Word target protocol, renderer interface and error types
- entities: Hostiles, the boss phase and typed pickups
- systems: Typing resolver, target selector, wave spawner, economy, stage flow
- stage: Stage configuration, controller and renderer
- utils: Configuration loading and word banks
- session: Progression context passed into stage controllers
"""
