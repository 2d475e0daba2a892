"""
Recommendation engine: decides which crop best fills a planting slot and
which crops should follow a harvest.

Modules
-------
zone_compliance : DissonanceCheck + check_dissonance() — frequency-zone rule,
                  jazz-mode waiver for Enhancers in non-structural slots.
growth_layers   : classify_layer(), check_shading(), ideal_layers_for_slot(),
                  layer / diversity / harvest-stagger scores.
companions      : is_antagonist(), is_explicit_companion(), companion_score(),
                  synergy_notes().
scorer          : CompatibilityComponents + compute_compatibility() +
                  rank_slot_candidates() — pure functions, no I/O.
succession      : suggest_succession() — filters then scores follow-up crops.
ranker          : rank_recommendations() + recommendations_to_rows().
guild           : compose_guild() fills the open slots around a star crop.
"""
