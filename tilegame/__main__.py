import uvicorn

from . import config

if __name__ == '__main__':
    uvicorn.run('tilegame.main:application', host=config.HOST, port=config.PORT)
