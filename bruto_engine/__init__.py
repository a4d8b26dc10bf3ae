"""Combat stat and weapon/skill resolution engine for Bruto combatants."""
