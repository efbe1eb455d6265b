import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///hunt.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Bearer key expected in the Authorization header. Unset disables the check.
    API_KEY = os.environ.get('API_KEY')
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', 'https://web.save-the-uoa.soshosai.com').split(',') if o.strip()]
    FORCE_HTTPS = os.environ.get('FORCE_HTTPS', 'false').lower() == 'true'
    # Final question is answered on site; its answers are counted but not stored
    FINAL_QUESTION_ID = os.environ.get('FINAL_QUESTION_ID', 'lv5_q1')
    DEFAULT_ROOM_ID = os.environ.get('DEFAULT_ROOM_ID', 'Web')
    # 'query' filters answered questions in SQL; 'sample' draws at random and retries
    QUESTION_SELECTION_MODE = os.environ.get('QUESTION_SELECTION_MODE', 'query')
    QUESTION_SELECT_MAX_ATTEMPTS = int(os.environ.get('QUESTION_SELECT_MAX_ATTEMPTS', '20'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
