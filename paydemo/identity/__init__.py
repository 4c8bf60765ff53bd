"""Users, sessions, in-memory repositories, authentication and the auth middleware."""