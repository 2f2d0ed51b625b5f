QUERY_TIME_URL = "https://api.steampowered.com/ITwoFactorService/QueryTime/v1/"
QUERY_TIME_TIMEOUT = 10.0
