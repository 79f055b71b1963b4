class BaseDatamodel:
    def __init__(self, db_client: object):
        self.db_client = db_client
