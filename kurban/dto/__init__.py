"""Request and response records for people, animals and payments."""