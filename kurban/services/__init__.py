"""Business rules for pekurban, animals, slaughters, distributions and payments."""