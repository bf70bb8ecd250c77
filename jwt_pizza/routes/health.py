from fastapi import APIRouter

from jwt_pizza import __version__
from jwt_pizza.routes import auth, franchise, order, user


router = APIRouter()


@router.get("/")
def root():
    return {"message": "welcome to JWT Pizza", "version": __version__}


@router.get("/api/docs")
def api_docs():
    return {
        "version": __version__,
        "endpoints": [*auth.docs, *user.docs, *order.docs, *franchise.docs],
    }
