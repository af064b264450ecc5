from flask import Flask, send_from_directory
from flask_cors import CORS
from flask_restful import Api, Resource
from flask_migrate import Migrate
from models import db
from dotenv import load_dotenv
import os
import logging

load_dotenv()

app = Flask(__name__)

app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///yourcode.db')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['JWT_SECRET'] = os.getenv('JWT_SECRET')
app.config['JWT_EXPIRES_SECONDS'] = int(os.getenv('JWT_EXPIRES_SECONDS', 60 * 60 * 24))
app.config['UPLOAD_FOLDER'] = os.path.abspath(os.getenv('UPLOAD_FOLDER', 'uploads'))
app.config['MAX_UPLOAD_BYTES'] = int(os.getenv('MAX_UPLOAD_BYTES', 5 * 1024 * 1024))

CORS(app, origins=os.getenv('CORS_ORIGINS', '*').split(','))

migrate = Migrate(app, db)
db.init_app(app)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s %(message)s'
)

api = Api(app)


class HealthCheck(Resource):
    def get(self):
        return {"status": "ok"}


class ServiceInfo(Resource):
    def get(self):
        return {
            "status": "success",
            "message": "YourCode API is running",
            "version": "1.0.0"
        }


api.add_resource(ServiceInfo, '/')
api.add_resource(HealthCheck, '/health')

from resources.auth import RegisterResource, LoginResource, VerifyTokenResource
from resources.posts import (
    PostListResource,
    SwipeFeedResource,
    PostDetailResource,
    PostLikeResource,
    PostPassResource,
    UserPostsResource
)
from resources.users import CurrentUserResource, UserProfileResource, UserSearchResource
from resources.uploads import UploadResource

# Auth routes
api.add_resource(RegisterResource, '/auth/register')
api.add_resource(LoginResource, '/auth/login')
api.add_resource(VerifyTokenResource, '/auth/verify')

# Post routes
api.add_resource(PostListResource, '/posts')
api.add_resource(SwipeFeedResource, '/posts/swipe')
api.add_resource(PostDetailResource, '/posts/<int:post_id>')
api.add_resource(PostLikeResource, '/posts/<int:post_id>/like')
api.add_resource(PostPassResource, '/posts/<int:post_id>/pass')

# User routes
api.add_resource(CurrentUserResource, '/users/me')
api.add_resource(UserSearchResource, '/users/search')
api.add_resource(UserProfileResource, '/users/<int:user_id>')
api.add_resource(UserPostsResource, '/users/<int:user_id>/posts')

# Upload routes
api.add_resource(UploadResource, '/upload')


@app.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(app.config['UPLOAD_FOLDER'], filename)


if __name__ == '__main__':
    with app.app_context():
        db.create_all()
    app.run(debug=True)
