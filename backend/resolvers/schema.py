# backend/resolvers/schema.py
import strawberry
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter

from database import get_db
from resolvers.mutation import Mutation
from resolvers.query import Query
from utils.mailer import Mailer, get_mailer

schema = strawberry.Schema(query=Query, mutation=Mutation)


def get_context(request: Request, db: Session = Depends(get_db), mailer: Mailer = Depends(get_mailer)):
    return {"request": request, "db": db, "mailer": mailer}


graphql_router = GraphQLRouter(schema, context_getter=get_context)
