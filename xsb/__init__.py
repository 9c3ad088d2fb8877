"""xsb — narzędzie CLI nad rejestrem profili, dopasowaniem wzorców i walidatorem szablonów."""
